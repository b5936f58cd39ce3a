from __future__ import annotations

"""Optional images and sounds, loaded in the background.

Every asset loads independently; a missing or broken file leaves its handle
as ``None`` and the renderer falls back to drawn shapes.
"""

import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import pygame

from roadrush.config import defaults
from roadrush.engine.events import AudioHooks

MUSIC_VOLUME = 0.35
HIT_VOLUME = 0.9


@dataclass
class SpriteSheet:
    """Horizontal strip of square-ish frames."""

    image: "pygame.Surface"
    frames: int
    frame_w: int
    frame_h: int

    @classmethod
    def from_image(cls, image) -> "SpriteSheet":
        w, h = image.get_size()
        frames = max(1, w // max(1, h))
        return cls(image=image, frames=frames, frame_w=w // frames, frame_h=h)

    def frame(self, index: int):
        return self.image.subsurface((index * self.frame_w, 0, self.frame_w, self.frame_h))


@dataclass
class Assets:
    car_sheet: Optional[SpriteSheet] = None
    obstacle_sheet: Optional[SpriteSheet] = None
    exhaust: Optional["pygame.Surface"] = None
    audio: AudioHooks = field(default_factory=AudioHooks)

    def status(self) -> str:
        images = sum(x is not None for x in (self.car_sheet, self.obstacle_sheet, self.exhaust))
        sounds = sum(x is not None for x in (self.audio.music, self.audio.hit))
        return f"images {images}/3, audio {sounds}/2"


def _load_image(path: Path):
    try:
        return pygame.image.load(str(path))
    except (pygame.error, FileNotFoundError) as exc:
        print(f"[assets] image unavailable: {path.name} ({exc})")
        return None


def _load_sound(path: Path, volume: float):
    if not pygame.mixer.get_init():
        return None
    try:
        sound = pygame.mixer.Sound(str(path))
    except (pygame.error, FileNotFoundError) as exc:
        print(f"[assets] sound unavailable: {path.name} ({exc})")
        return None
    sound.set_volume(volume)
    return sound


def load_assets(assets_dir: Path) -> Assets:
    car = _load_image(assets_dir / defaults.CAR_SHEET)
    obstacle = _load_image(assets_dir / defaults.OBSTACLE_SHEET)
    return Assets(
        car_sheet=SpriteSheet.from_image(car) if car is not None else None,
        obstacle_sheet=SpriteSheet.from_image(obstacle) if obstacle is not None else None,
        exhaust=_load_image(assets_dir / defaults.EXHAUST_IMAGE),
        audio=AudioHooks(
            music=_load_sound(assets_dir / defaults.MUSIC, MUSIC_VOLUME),
            hit=_load_sound(assets_dir / defaults.HIT_SOUND, HIT_VOLUME),
        ),
    )


class AssetLoader:
    """Loads assets on a daemon thread so the first frames never wait on disk."""

    def __init__(self, assets_dir: Path):
        self.assets_dir = Path(assets_dir)
        self.assets: Optional[Assets] = None
        self._thread = threading.Thread(target=self._run, daemon=True)

    def start(self) -> "AssetLoader":
        self._thread.start()
        return self

    def _run(self) -> None:
        self.assets = load_assets(self.assets_dir)
        print(f"[assets] {self.assets.status()}")

    @property
    def ready(self) -> bool:
        return self.assets is not None
