# main.py
import argparse
import logging

import pygame

from config import BOT_DELAY_MS, LOG_FORMAT, WINDOW_SIZE
from ui import AppUI


def create_icon():
    """Icon: a letter S on a dark background."""
    size = 64
    icon = pygame.Surface((size, size), pygame.SRCALPHA)
    icon.fill((18, 18, 22, 255))

    font = pygame.font.Font(None, size - 8)
    text_surface = font.render("S", True, (245, 200, 60))
    text_rect = text_surface.get_rect()
    text_rect.center = (size // 2, size // 2)
    icon.blit(text_surface, text_rect)

    return icon


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Scorch: a hex-board capture game against the computer")
    parser.add_argument("--seed", type=int, default=None, help="random seed for the board layout and the bot")
    parser.add_argument("--delay", type=int, default=BOT_DELAY_MS, help="computer reply delay in milliseconds")
    parser.add_argument("--log-level", default="WARNING", help="logging level (DEBUG, INFO, ...)")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format=LOG_FORMAT)

    pygame.init()
    screen = pygame.display.set_mode(WINDOW_SIZE)
    pygame.display.set_caption("Scorch")
    pygame.display.set_icon(create_icon())

    AppUI(screen, seed=args.seed, bot_delay_ms=args.delay).run()


if __name__ == "__main__":
    main()
