"""Decorative particle bursts, ripples, and floating banners."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Iterable

import pygame

from .config import (
    FLOATING_TEXT_FADE,
    FLOATING_TEXT_LIMIT,
    FLOATING_TEXT_RISE,
    FLOATING_TEXT_TOP,
    PARTICLE_COUNT,
    PARTICLE_LIFE,
    RIPPLE_GROWTH,
    RIPPLE_LIFE,
    TILE,
)
from .foods import FoodArchetype, FoodEffect


@dataclass(slots=True)
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    life: float
    color: tuple[int, int, int]


@dataclass(slots=True)
class Ripple:
    x: float
    y: float
    radius: float
    life: float
    color: tuple[int, int, int]


@dataclass(slots=True)
class FloatingText:
    text: str
    color: tuple[int, int, int]
    y: float = FLOATING_TEXT_TOP
    life: float = 1.0


EFFECT_BANNERS = {
    FoodEffect.SPEED_BOOST: "tempo up",
    FoodEffect.SLOW_MOTION: "slow motion",
    FoodEffect.OVERDRIVE: "overdrive",
}


def cell_center(cell: tuple[int, int], offset_y: int = 0) -> tuple[float, float]:
    return (cell[0] + 0.5) * TILE, (cell[1] + 0.5) * TILE + offset_y


def spawn_particles(
    particles: list[Particle],
    origin: tuple[float, float],
    color: pygame.Color,
    count: int = PARTICLE_COUNT,
) -> None:
    """Emit an evenly spaced ring of sparks with a little jitter."""

    cx, cy = origin
    for idx in range(count):
        angle = math.tau * idx / count + random.uniform(0.0, 0.4)
        speed = random.uniform(70.0, 120.0)
        particles.append(
            Particle(
                x=cx,
                y=cy,
                vx=math.cos(angle) * speed,
                vy=math.sin(angle) * speed,
                life=PARTICLE_LIFE * random.uniform(0.7, 1.0),
                color=(color.r, color.g, color.b),
            )
        )


def spawn_ripple(
    ripples: list[Ripple], origin: tuple[float, float], color: pygame.Color
) -> None:
    ripples.append(
        Ripple(
            x=origin[0],
            y=origin[1],
            radius=TILE * 0.6,
            life=RIPPLE_LIFE,
            color=(color.r, color.g, color.b),
        )
    )


def update_particles(particles: list[Particle], dt: float) -> list[Particle]:
    """Advance particle positions (dt in seconds) and trim dead ones."""

    if dt <= 0:
        return particles
    drag = 0.995 ** (dt * 1000)
    for particle in particles:
        particle.x += particle.vx * dt
        particle.y += particle.vy * dt
        particle.vy += 180.0 * dt
        particle.vx *= drag
        particle.vy *= drag
        particle.life = max(0.0, particle.life - dt)
    return [p for p in particles if p.life > 0]


def update_ripples(ripples: list[Ripple], dt: float) -> list[Ripple]:
    if dt <= 0:
        return ripples
    for ripple in ripples:
        ripple.radius += RIPPLE_GROWTH * dt
        ripple.life = max(0.0, ripple.life - dt)
    return [rip for rip in ripples if rip.life > 0]


def draw_particles(surface: pygame.Surface, particles: Iterable[Particle]) -> None:
    for particle in particles:
        ratio = particle.life / PARTICLE_LIFE
        alpha = int(230 * ratio)
        if alpha <= 0:
            continue
        radius = max(1, int(3.5 * (1 - ratio * 0.4)))
        side = radius * 2
        dot = pygame.Surface((side, side), pygame.SRCALPHA)
        pygame.draw.circle(dot, (*particle.color, alpha), (radius, radius), radius)
        surface.blit(dot, (int(particle.x) - radius, int(particle.y) - radius))


def draw_ripples(surface: pygame.Surface, ripples: Iterable[Ripple]) -> None:
    ripples_list = list(ripples)
    if not ripples_list:
        return
    overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    for ripple in ripples_list:
        alpha = int(255 * 0.5 * ripple.life / RIPPLE_LIFE)
        if alpha <= 0:
            continue
        pygame.draw.circle(
            overlay,
            (*ripple.color, alpha),
            (int(ripple.x), int(ripple.y)),
            int(ripple.radius),
            width=3,
        )
    surface.blit(overlay, (0, 0))


def effect_banner(archetype: FoodArchetype | None) -> str | None:
    """Banner text for a food that changes the tempo; plain foods get none."""
    if archetype is None or archetype.effect is None:
        return None
    return f"{archetype.label}: {EFFECT_BANNERS[archetype.effect]}"


def spawn_floating_text(
    texts: list[FloatingText],
    text: str,
    color: pygame.Color,
    limit: int = FLOATING_TEXT_LIMIT,
) -> None:
    """Queue a banner; the oldest one is dropped once ``limit`` are showing."""

    while len(texts) >= limit:
        texts.pop(0)
    texts.append(FloatingText(text=text, color=(color.r, color.g, color.b)))


def update_floating_texts(
    texts: list[FloatingText], dt: float
) -> list[FloatingText]:
    if dt <= 0:
        return texts
    for item in texts:
        item.y -= FLOATING_TEXT_RISE * dt
        item.life = max(0.0, item.life - FLOATING_TEXT_FADE * dt)
    return [item for item in texts if item.life > 0]


def draw_floating_texts(
    surface: pygame.Surface, font: pygame.font.Font, texts: Iterable[FloatingText]
) -> None:
    center_x = surface.get_width() // 2
    for idx, item in enumerate(texts):
        label = font.render(item.text, True, item.color)
        label.set_alpha(int(255 * item.life))
        rect = label.get_rect()
        rect.center = (center_x, int(item.y) + idx * 26)
        surface.blit(label, rect)
