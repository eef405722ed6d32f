"""
tick-state Arena
Interactive platformer demo showcasing tick-state: per-state update/draw
events, guarded transitions, a wildcard hit, a reflexive reset and history.
"""

import argparse
import logging
import random
import sys
from dataclasses import dataclass, field

import pygame

from tick_state import STATE_CHANGED, MachineConfig, StateMachine

# --- Configuration ---
WIDTH, HEIGHT = 960, 540
FPS = 60
TITLE = "tick-state Arena"

FLOOR_Y = HEIGHT - 80
PLAYER_SIZE = 32
WALK_SPEED = 240.0
JUMP_SPEED = 520.0
GRAVITY = 1400.0
KNOCKBACK = 180.0
HURT_MS = 700
SPIKE_SPEED = 220.0
SPIKE_SIZE = 18
HISTORY_SIZE = 6

# Colors
BG_COLOR = (26, 26, 46)
FLOOR_COLOR = (70, 70, 100)
HUD_COLOR = (200, 200, 220)
SPIKE_COLOR = (255, 100, 100)
STATE_COLORS = {
    "idle": (0, 255, 255),
    "walk": (0, 255, 100),
    "jump": (255, 215, 0),
    "hurt": (255, 0, 200),
}


@dataclass
class Player:
    x: float = WIDTH / 2
    y: float = FLOOR_Y - PLAYER_SIZE
    vx: float = 0.0
    vy: float = 0.0
    direction: int = 0
    dt: float = 0.0
    flash: bool = False

    @property
    def grounded(self) -> bool:
        return self.y >= FLOOR_Y - PLAYER_SIZE

    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), PLAYER_SIZE, PLAYER_SIZE)


@dataclass
class Spike:
    x: float
    vx: float

    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), FLOOR_Y - SPIKE_SIZE, SPIKE_SIZE, SPIKE_SIZE)


@dataclass
class Arena:
    player: Player = field(default_factory=Player)
    spikes: list[Spike] = field(default_factory=list)
    log: list[str] = field(default_factory=list)


def apply_physics(player: Player) -> None:
    player.vy += GRAVITY * player.dt
    player.x = max(0.0, min(WIDTH - PLAYER_SIZE, player.x + player.vx * player.dt))
    player.y = min(FLOOR_Y - PLAYER_SIZE, player.y + player.vy * player.dt)
    if player.grounded:
        player.vy = 0.0


def build_machine(arena: Arena) -> StateMachine:
    player = arena.player
    fsm = StateMachine("idle", config=MachineConfig(history_enabled=True, history_max_size=HISTORY_SIZE))

    def idle_enter(data=None):
        player.vx = 0.0

    def walk_update():
        player.vx = WALK_SPEED * player.direction
        apply_physics(player)

    def jump_enter(data=None):
        player.vy = -JUMP_SPEED

    def jump_update():
        player.vx = WALK_SPEED * player.direction
        apply_physics(player)

    def hurt_enter(spike=None):
        away = 1 if spike is None or spike.x < player.x else -1
        player.vx = KNOCKBACK * away
        player.vy = -JUMP_SPEED / 2

    def hurt_update():
        player.flash = (fsm.get_time() // 80) % 2 == 0
        apply_physics(player)

    def hurt_leave(data=None):
        player.flash = False

    fsm.add("idle", {"enter": idle_enter})
    fsm.add("walk", {"update": walk_update})
    fsm.add("jump", {"enter": jump_enter, "update": jump_update})
    fsm.add("hurt", {"enter": hurt_enter, "leave": hurt_leave, "update": hurt_update})
    fsm.event_set_default_method("update", lambda: apply_physics(player))

    fsm.add_transition("move", "idle", "walk", condition=lambda: player.direction != 0)
    fsm.add_transition("move", "walk", "idle", condition=lambda: player.direction == 0)
    fsm.add_transition("jump", ["idle", "walk"], "jump", condition=lambda: player.grounded)
    fsm.add_transition("land", "jump", "walk", condition=lambda: player.grounded and player.direction != 0)
    fsm.add_transition("land", "jump", "idle", condition=lambda: player.grounded)
    fsm.add_transition("recover", "hurt", "idle", condition=lambda: fsm.get_time() >= HURT_MS and player.grounded)
    fsm.add_wildcard_transition("hit", "hurt", condition=lambda: not fsm.state_is("hurt"))
    fsm.add_reflexive_transition("reset", ["idle", "walk"])

    def on_change(dest: str, source: str, transition: str | None) -> None:
        arena.log.append(f"{source} -> {dest}" + (f" ({transition})" if transition else ""))
        del arena.log[:-5]

    fsm.on(STATE_CHANGED, on_change)
    return fsm


def spawn_spike() -> Spike:
    if random.random() < 0.5:
        return Spike(x=-SPIKE_SIZE, vx=SPIKE_SPEED * random.uniform(0.7, 1.3))
    return Spike(x=WIDTH, vx=-SPIKE_SPEED * random.uniform(0.7, 1.3))


def main():
    parser = argparse.ArgumentParser(description=TITLE)
    parser.add_argument("--verbose", action="store_true", help="log every state change")
    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption(TITLE)
    pg_clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 14)

    arena = Arena()
    fsm = build_machine(arena)
    player = arena.player
    spawn_timer = 0.0
    running = True

    while running:
        player.dt = pg_clock.tick(FPS) / 1000.0

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key in (pygame.K_SPACE, pygame.K_UP):
                    fsm.trigger("jump")
                elif event.key == pygame.K_r:
                    fsm.trigger("reset")

        keys = pygame.key.get_pressed()
        player.direction = int(keys[pygame.K_RIGHT]) - int(keys[pygame.K_LEFT])

        # --- Update ---
        fsm.trigger("move")
        fsm.update()
        fsm.trigger("land")
        fsm.trigger("recover")

        spawn_timer -= player.dt
        if spawn_timer <= 0:
            arena.spikes.append(spawn_spike())
            spawn_timer = random.uniform(1.0, 2.5)
        for spike in arena.spikes:
            spike.x += spike.vx * player.dt
            if spike.rect().colliderect(player.rect()):
                fsm.trigger("hit", data=spike)
        arena.spikes = [s for s in arena.spikes if -SPIKE_SIZE * 2 < s.x < WIDTH + SPIKE_SIZE]

        # --- Draw ---
        screen.fill(BG_COLOR)
        pygame.draw.rect(screen, FLOOR_COLOR, pygame.Rect(0, FLOOR_Y, WIDTH, HEIGHT - FLOOR_Y))
        for spike in arena.spikes:
            pygame.draw.rect(screen, SPIKE_COLOR, spike.rect())
        state = fsm.get_current_state()
        if not player.flash:
            pygame.draw.rect(screen, STATE_COLORS[state], player.rect())

        # --- HUD ---
        hud_lines = [
            f"State: {state}   Previous: {fsm.get_previous_state()}   In state: {fsm.get_time() / 1000:.1f}s",
            f"History: {' > '.join(fsm.history_get())}",
            "Left/Right=Walk  Space=Jump  R=Reset  Esc=Quit",
            *arena.log,
        ]
        for i, line in enumerate(hud_lines):
            surf = font.render(line, True, HUD_COLOR)
            screen.blit(surf, (10, 8 + i * 20))

        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
