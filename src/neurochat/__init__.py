"""neurochat - Telegram character chat relay for llama.cpp."""
