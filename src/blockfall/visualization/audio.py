from __future__ import annotations

import os
import warnings
from typing import Dict, Iterable, Optional

import pygame

from blockfall.game import EventKind, GameEvent


SOUND_FILES: Dict[str, str] = {
    "move": "move.mp3",
    "rotate": "rotate.mp3",
    "clear": "clear.mp3",
    "combo": "combo.mp3",
    "gameOver": "gameover.mp3",
    "levelUp": "levelup.mp3",
    "start": "start.mp3",
}
BGM_FILE = "bgm.mp3"

# Relative loudness per cue, applied on top of effects_volume
CUE_GAIN: Dict[str, float] = {
    "move": 0.3,
    "rotate": 0.4,
    "clear": 0.8,
    "combo": 0.8,
    "levelUp": 0.9,
    "gameOver": 0.8,
    "start": 0.7,
}


class SoundBoard:
    """Plays engine events through pygame.mixer; silent when sounds are unavailable.

    Background music loops from ``start`` until ``gameOver``.
    """

    def __init__(self, sound_dir: str = "sounds", effects_volume: float = 0.6, bgm_volume: float = 0.3) -> None:
        self.sound_dir = sound_dir
        self.effects_volume = effects_volume
        self.bgm_volume = bgm_volume
        self.muted = False
        self.music_playing = False
        self._music_failed = False
        self._sounds: Dict[str, Optional[pygame.mixer.Sound]] = {}

    def _mixer_ready(self) -> None:
        if pygame.mixer.get_init() is None:
            pygame.mixer.init()

    def _load(self, cue: str) -> Optional[pygame.mixer.Sound]:
        if cue in self._sounds:
            return self._sounds[cue]
        sound = None
        path = os.path.join(self.sound_dir, SOUND_FILES[cue])
        try:
            self._mixer_ready()
            sound = pygame.mixer.Sound(path)
        except (pygame.error, FileNotFoundError) as exc:
            warnings.warn(f"Error loading sound {cue}: {exc}")
        self._sounds[cue] = sound
        return sound

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        if self.music_playing:
            pygame.mixer.music.set_volume(0.0 if self.muted else self.bgm_volume)
        return self.muted

    def play(self, cue: str, volume: float = 1.0) -> None:
        if self.muted:
            return
        sound = self._load(cue)
        if sound is None:
            return
        sound.set_volume(min(1.0, self.effects_volume * CUE_GAIN.get(cue, 1.0) * volume))
        sound.play()

    def start_music(self) -> None:
        if self._music_failed:
            return
        try:
            self._mixer_ready()
            pygame.mixer.music.load(os.path.join(self.sound_dir, BGM_FILE))
            pygame.mixer.music.set_volume(0.0 if self.muted else self.bgm_volume)
            pygame.mixer.music.play(loops=-1, fade_ms=1000)
        except (pygame.error, FileNotFoundError) as exc:
            self._music_failed = True
            warnings.warn(f"Error playing BGM: {exc}")
            return
        self.music_playing = True

    def stop_music(self) -> None:
        if not self.music_playing:
            return
        self.music_playing = False
        pygame.mixer.music.fadeout(500)

    def handle(self, events: Iterable[GameEvent]) -> None:
        events = list(events)
        for i, event in enumerate(events):
            if event.kind is EventKind.LINE_CLEAR:
                # A streak plays its combo cue in place of this clear cue
                following = events[i + 1] if i + 1 < len(events) else None
                if following is not None and following.kind is EventKind.COMBO:
                    continue
                self.play("clear", 0.6 + (event.value or 0) * 0.1)
            elif event.kind is EventKind.COMBO:
                self.play("combo", 0.6 + (event.value or 0) * 0.1)
            elif event.kind is EventKind.MOVE:
                self.play("move", 0.4)
            elif event.kind is EventKind.ROTATE:
                self.play("rotate", 0.5)
            elif event.kind is EventKind.LEVEL_UP:
                self.play("levelUp", 1.0)
            elif event.kind is EventKind.GAME_OVER:
                self.stop_music()
                self.play("gameOver", 0.8)
            elif event.kind is EventKind.START:
                self.stop_music()
                self.play("start", 0.8)
                self.start_music()
