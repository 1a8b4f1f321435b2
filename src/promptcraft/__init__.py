"""PromptCraft - structured prompt documents from plain descriptions."""

__version__ = "0.1.0"
