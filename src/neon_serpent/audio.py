"""Procedural chiptune cues for Neon Serpent, driven by game events."""

from __future__ import annotations

import logging
import math
import random
from array import array
from dataclasses import dataclass
from typing import Dict, List, Tuple

import pygame

from .events import FoodEaten, GameEvent, GameOver, GameStarted, LevelChanged

logger = logging.getLogger(__name__)

# ===========================
#  Synth Configuration
# ===========================


@dataclass(frozen=True)
class SynthPatch:
    freq: float
    duration_ms: int
    # Extra notes as frequency ratios, each starting arp_step_ms after the last.
    arpeggio: Tuple[float, ...] = ()
    arp_step_ms: int = 40
    harmonics: Tuple[Tuple[float, float], ...] = ((1.0, 1.0),)
    sweep: float = 0.0
    noise: float = 0.0
    attack: float = 0.02
    decay: float = 0.15
    release: float = 0.4
    sustain_level: float = 0.6
    volume: float = 0.5
    waveform: str = "sine"  # "sine", "square", "triangle", "sawtooth"
    bitcrush_levels: int = 0
    fade_ms: int = 12
    mix_volume: float = 0.4


def _fruit_patch(freq: float) -> SynthPatch:
    """Two-note sine blip an octave apart, pitched per food kind."""
    return SynthPatch(
        freq=freq,
        duration_ms=250,
        arpeggio=(2.0,),
        decay=0.1,
        sustain_level=0.4,
        volume=0.8,
        mix_volume=0.34,
    )


PATCHES: Dict[str, SynthPatch] = {
    "start": SynthPatch(
        freq=220,
        duration_ms=350,
        arpeggio=(1.5, 2.0),
        waveform="triangle",
        volume=0.8,
        mix_volume=0.32,
    ),
    "berry": _fruit_patch(260),
    "citrus": _fruit_patch(330),
    "mint": _fruit_patch(210),
    "royal": _fruit_patch(480),
    "level_up": SynthPatch(
        freq=420,
        duration_ms=380,
        arpeggio=(560 / 420, 720 / 420),
        waveform="triangle",
        volume=0.9,
        mix_volume=0.4,
    ),
    "over": SynthPatch(
        freq=320,
        duration_ms=450,
        arpeggio=(180 / 320,),
        sweep=-60,
        noise=0.08,
        waveform="sawtooth",
        bitcrush_levels=6,
        volume=0.7,
        mix_volume=0.32,
    ),
}


# ===========================
#   Audio Engine
# ===========================


class AudioEngine:
    """Encapsulates mixer init plus procedural tone playback."""

    def __init__(self, *, enabled: bool = True) -> None:
        self.enabled = False
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        self.sample_rate: int = 32000
        self.sound_fades: Dict[str, int] = {}
        self.mix_levels: Dict[str, float] = {}
        self.channel_count: int = 12
        self._channels: List[pygame.mixer.Channel] = []
        self.master_sfx_volume: float = 0.45
        self._last_play: Dict[str, int] = {}
        self._sound_gate_ms: int = 60

        if enabled:
            self._init_audio()

    def _init_audio(self) -> None:
        """Initialise pygame.mixer and synthesise the tones we need."""

        try:
            pygame.mixer.init(frequency=self.sample_rate, size=-16, channels=1)
        except pygame.error as exc:
            logger.warning("audio disabled: %s", exc)
            self.enabled = False
            self.sounds.clear()
            return

        pygame.mixer.set_num_channels(self.channel_count)
        self.enabled = True
        mixer_info = pygame.mixer.get_init()
        if mixer_info:
            self.sample_rate = mixer_info[0]
        self._channels = [pygame.mixer.Channel(i) for i in range(self.channel_count)]

        self.sounds = {}
        for name, patch in PATCHES.items():
            self.sounds[name] = pygame.mixer.Sound(buffer=self._render_patch(patch))
            self.sound_fades[name] = patch.fade_ms
            self.mix_levels[name] = patch.mix_volume

    # ===========================
    #   Synthesizer Core
    # ===========================

    @staticmethod
    def _wave(waveform: str, cycle_pos: float) -> float:
        if waveform == "square":
            return 1.0 if cycle_pos < 0.5 else -1.0
        if waveform == "triangle":
            return 4.0 * abs(cycle_pos - 0.5) - 1.0
        if waveform == "sawtooth":
            return 2.0 * cycle_pos - 1.0
        return math.sin(2.0 * math.pi * cycle_pos)

    def _render_voice(
        self, patch: SynthPatch, freq: float, sample_count: int
    ) -> List[float]:
        """One enveloped note of ``sample_count`` samples."""
        sample_rate = self.sample_rate
        attack = int(sample_count * patch.attack)
        decay = int(sample_count * patch.decay)
        release = int(sample_count * patch.release)
        sustain_start = min(sample_count, attack + decay)
        sustain_end = max(sustain_start, sample_count - release)

        samples = [0.0] * sample_count
        for idx in range(sample_count):
            t = idx / sample_rate
            progress = idx / sample_count
            voice_freq = freq + patch.sweep * progress

            sample_val = 0.0
            for mult, weight in patch.harmonics:
                cycle_pos = (voice_freq * mult * t) % 1.0
                sample_val += weight * self._wave(patch.waveform, cycle_pos)
            if patch.noise > 0.0:
                sample_val += patch.noise * (random.random() * 2.0 - 1.0)

            # ADSR
            if attack and idx < attack:
                env = idx / attack
            elif decay and idx < sustain_start:
                env = 1.0 - (1.0 - patch.sustain_level) * ((idx - attack) / decay)
            elif idx < sustain_end:
                env = patch.sustain_level
            elif release > 0:
                env = patch.sustain_level * (
                    1.0 - (idx - sustain_end) / max(1, release)
                )
            else:
                env = 0.0
            samples[idx] = sample_val * max(0.0, env)
        return samples

    def _render_patch(self, patch: SynthPatch) -> array:
        """Mix the root note and its arpeggio into one 16-bit buffer."""

        sample_rate = self.sample_rate
        voice_len = max(1, int(sample_rate * patch.duration_ms / 1000))
        step = int(sample_rate * patch.arp_step_ms / 1000)
        ratios = (1.0,) + patch.arpeggio
        total = voice_len + step * (len(ratios) - 1)
        mixed = [0.0] * total

        for index, ratio in enumerate(ratios):
            offset = index * step
            voice = self._render_voice(patch, patch.freq * ratio, voice_len)
            for idx, val in enumerate(voice):
                mixed[offset + idx] += val

        if patch.bitcrush_levels > 0:
            levels = float(patch.bitcrush_levels)
            mixed = [round(val * levels) / levels for val in mixed]

        peak = max((abs(val) for val in mixed), default=1.0)
        if peak <= 0.0:
            peak = 1.0
        scale = 32767 * (patch.volume * self.master_sfx_volume) / peak
        return array(
            "h",
            (int(max(-32767, min(32767, val * scale))) for val in mixed),
        )

    def _find_channel(self) -> pygame.mixer.Channel | None:
        if not self._channels:
            return None
        for channel in self._channels:
            if not channel.get_busy():
                return channel
        # Steal the first channel if all are busy.
        channel = self._channels[0]
        channel.stop()
        return channel

    # ===========================
    #   Public API
    # ===========================

    def play(self, name: str) -> None:
        """Play the requested tone."""
        if not self.enabled:
            return
        sound = self.sounds.get(name)
        if not sound:
            return
        now = pygame.time.get_ticks()
        if now - self._last_play.get(name, -self._sound_gate_ms) < self._sound_gate_ms:
            return
        self._last_play[name] = now

        try:
            channel = self._find_channel()
            if channel is None:
                return
            channel.set_volume(self.mix_levels.get(name, 0.4))
            channel.play(sound, fade_ms=self.sound_fades.get(name, 12))
        except pygame.error as exc:
            logger.warning("audio playback failed, muting: %s", exc)
            self.enabled = False

    def handle_event(self, event: GameEvent) -> None:
        """Map a game event onto its cue."""
        if isinstance(event, GameStarted):
            self.play("start")
        elif isinstance(event, FoodEaten):
            self.play(event.key if event.key in PATCHES else "berry")
        elif isinstance(event, LevelChanged):
            self.play("level_up")
        elif isinstance(event, GameOver):
            self.play("over")
