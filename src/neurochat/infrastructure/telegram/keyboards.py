"""Inline keyboards."""

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

# (label, callback data) pairs, two buttons per row
MAIN_MENU_BUTTONS: list[list[tuple[str, str]]] = [
    [("New Character", "/newchar"), ("List Characters", "/listchar")],
    [("Switch Character", "/switchchar"), ("Set Character Name", "/setcharname")],
    [("Set Prompt", "/setprompt"), ("Set Greeting", "/setgreeting")],
    [("Set My Name", "/setusername"), ("Set My Description", "/setuserdesc")],
    [("Clear Chat History", "/clearchat"), ("Character Info", "/charinfo")],
]


def create_main_menu() -> InlineKeyboardMarkup:
    """Build the main menu keyboard."""
    return InlineKeyboardMarkup(
        [
            [InlineKeyboardButton(label, callback_data=data) for label, data in row]
            for row in MAIN_MENU_BUTTONS
        ]
    )
