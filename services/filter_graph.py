"""
Ducking filter graph for voice-over-music mixes.

Input 0 is the background track, input 1 is the synthesized voice. The voice
is gain-scaled, delayed and padded with trailing silence so the music plays
alone for a moment before the voice enters and keeps going after it ends.
amix averages its inputs, so the combined stream gets a compensating gain.
"""
from dataclasses import dataclass


def _fmt(value: float) -> str:
    return f"{value:.1f}"


@dataclass(frozen=True)
class FilterGraphSpec:
    background_gain: float = 0.2
    voice_gain: float = 1.5
    voice_delay_ms: int = 1000
    voice_pad_seconds: int = 6
    duration_policy: str = "shortest"
    dropout_transition: int = 2
    output_gain: float = 2.0

    def background_chain(self) -> str:
        return f"[0:a]volume={_fmt(self.background_gain)}[bg]"

    def voice_chain(self) -> str:
        # gain -> delay (both channels) -> pad, in that order
        return (
            f"[1:a]volume={_fmt(self.voice_gain)},"
            f"adelay={self.voice_delay_ms}|{self.voice_delay_ms},"
            f"apad=pad_dur={self.voice_pad_seconds}[v]"
        )

    def mix_chain(self) -> str:
        return (
            f"[bg][v]amix=inputs=2:duration={self.duration_policy}"
            f":dropout_transition={self.dropout_transition}[mixed]"
        )

    def output_chain(self) -> str:
        return f"[mixed]volume={_fmt(self.output_gain)}"

    def to_expression(self) -> str:
        """Serialize to the ffmpeg -filter_complex expression."""
        return "; ".join([
            self.background_chain(),
            self.voice_chain(),
            self.mix_chain(),
            self.output_chain(),
        ])


# Fixed contract; never built from request data.
DUCKING_FILTER = FilterGraphSpec()
