"""Jinja2 template utilities for bot replies."""

from jinja2 import Environment, PackageLoader

from neurochat.domain.entities import User


def create_jinja_env() -> Environment:
    """Create Jinja2 environment for reply templates.

    Replies are sent in HTML parse mode, so every template is autoescaped.

    Returns:
        Configured Jinja2 environment.
    """
    return Environment(
        loader=PackageLoader("neurochat.presentation", "templates"),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


_env = create_jinja_env()


def render_character_list(user: User) -> str:
    """Render the numbered list of the user's characters."""
    template = _env.get_template("character_list.j2")
    return template.render(
        characters=user.characters,
        current_index=user.current_character_index,
    )


def render_character_info(user: User, history_limit: int) -> str:
    """Render details of the current character."""
    template = _env.get_template("character_info.j2")
    return template.render(
        character=user.current_character,
        history_limit=history_limit,
    )
