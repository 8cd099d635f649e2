"""Generation parameters for a model call."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GenerationConfig:
    """Sampling parameters sent with every completion request.

    Attributes:
        max_tokens: Maximum number of output tokens.
        temperature: Sampling temperature.
        top_p: Nucleus sampling probability.
        top_k: Top-k truncation (0 disables it).
        repeat_penalty: Repetition penalty.
        presence_penalty: Presence penalty.
        frequency_penalty: Frequency penalty.
    """

    max_tokens: int = 500
    temperature: float = 0.7
    top_p: float = 0.9
    top_k: int = 0
    repeat_penalty: float = 1.1
    presence_penalty: float = 0.0
    frequency_penalty: float = 0.0
