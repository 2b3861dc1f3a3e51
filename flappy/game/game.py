# flappy/game/game.py
import sys, argparse, logging
import pygame
from pygame import K_SPACE, K_UP, K_ESCAPE
from .config import DEFAULT_WIDTH, DEFAULT_HEIGHT, FPS, BEST_SCORE_FILE, SEED_DEFAULT
from .phase import Phase
from .render import Renderer
from .simulation import Simulation
from .storage import BestScoreStore

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Flappy Gates")
    p.add_argument("--seed", type=int, default=SEED_DEFAULT,
                   help="Obstacle seed. Omit for a random layout each launch.")
    p.add_argument("--width", type=int, default=DEFAULT_WIDTH)
    p.add_argument("--height", type=int, default=DEFAULT_HEIGHT)
    p.add_argument("--best-file", default=BEST_SCORE_FILE,
                   help="Where the best score is kept between sessions.")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p.parse_args(argv)


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    pygame.init()
    pygame.display.set_caption("Flappy Gates")
    screen = pygame.display.set_mode((args.width, args.height), pygame.RESIZABLE)
    clock = pygame.time.Clock()

    sim = Simulation(*screen.get_size(), seed=args.seed, store=BestScoreStore(args.best_file))
    renderer = Renderer(screen)
    sim.add_phase_listener(
        lambda old, new: pygame.display.set_caption(
            "Flappy Gates — game over" if new is Phase.OVER else "Flappy Gates"))
    logger.info("seed=%s best=%d", sim.seed, sim.best)

    while True:
        dt = clock.tick(FPS) / 1000.0   # clamped inside tick()

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key in (K_SPACE, K_UP):
                    sim.handle_primary_action()
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                sim.handle_primary_action()
            if event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                renderer.resize(screen)
                sim.on_resize(event.w, event.h)

        sim.tick(dt)
        renderer.draw(sim.snapshot())
        pygame.display.flip()


if __name__ == "__main__":
    run()
