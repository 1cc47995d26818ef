"""Prompt fragments used when turning retrieved chunks into model context."""

# Grounding context block handed to the chat prompt
CONTEXT_HEADER: str = "Relevant information from the sources:\n\n"

CONTEXT_ENTRY_TEMPLATE: str = "[Source {index}] {text}\nSource: {source_tag}\n\n"
