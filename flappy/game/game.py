# flappy/game/game.py
import sys, argparse
import pygame
from pygame import K_SPACE, K_ESCAPE
from .config import (
    BOARD_WIDTH, BOARD_HEIGHT, FPS, SEED_DEFAULT,
    COLOR_BG, COLOR_FG, COLOR_PLAYER, COLOR_PIPE, COLOR_PIPE_EDGE, COLOR_DANGER
)
from .state import FlappyGame, Phase, Outcome, RenderSnapshot


def parse_args(argv=None):
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None,
                   help="Pipe seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--verbose", action="store_true",
                   help="Print a one-line summary every time a game ends.")
    return p.parse_args(argv)


def resolve_seed(seed_arg):
    # None -> SEED_DEFAULT; -1 -> random (PipeStream picks one)
    if seed_arg is None:
        return SEED_DEFAULT
    if seed_arg == -1:
        return None
    return seed_arg


def draw(screen: pygame.Surface, snap: RenderSnapshot, font, big_font):
    screen.fill(COLOR_BG)

    for box in snap.pipes:
        r = box.to_rect()
        pygame.draw.rect(screen, COLOR_PIPE, r)
        pygame.draw.rect(screen, COLOR_PIPE_EDGE, r, width=2)

    lost = snap.phase is Phase.OVER and snap.outcome is Outcome.LOST
    pygame.draw.rect(screen, COLOR_DANGER if lost else COLOR_PLAYER, snap.player.to_rect())

    # score / game over line, top-left like the classic HUD
    hud = snap.message if (snap.phase is Phase.PLAYING or lost) else str(int(snap.score))
    screen.blit(big_font.render(hud, True, COLOR_FG), (10, 10))
    screen.blit(font.render(f"Seed: {snap.seed}   SPACE flap | ESC quit", True, COLOR_FG),
                (10, BOARD_HEIGHT - 26))

    if snap.phase is Phase.NOT_STARTED or snap.outcome is Outcome.WON:
        txt = big_font.render(snap.message, True, COLOR_FG)
        screen.blit(txt, (BOARD_WIDTH // 2 - txt.get_width() // 2, BOARD_HEIGHT // 2))


def run(argv=None):
    args = parse_args(argv)

    pygame.init()
    pygame.display.set_caption("Flappy Bird")
    screen = pygame.display.set_mode((BOARD_WIDTH, BOARD_HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("arial", 16)
    big_font = pygame.font.SysFont("arial", 32)

    game = FlappyGame(seed=resolve_seed(args.seed))
    reported = False

    while True:
        clock.tick(FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key == K_SPACE:
                    game.on_impulse()
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                game.on_impulse()

        game.tick()

        if game.phase is Phase.OVER and not reported:
            reported = True
            if args.verbose:
                print(f"[GAME OVER] outcome={game.outcome.value} score={game.score:.1f} "
                      f"ticks={game.ticks} cause={game.death_cause} seed={game.seed}")
        elif game.phase is not Phase.OVER:
            reported = False

        draw(screen, game.snapshot(), font, big_font)
        pygame.display.flip()


if __name__ == "__main__":
    run()
