#!/usr/bin/env python3

import argparse

from duel.core.data import load_stage_config
from duel.core.input_system import KeyConfigLoader
from duel.core.renderer import RendererConfig
from duel.game.game import Game


def main():
    parser = argparse.ArgumentParser(description="Two-player sword duel")
    parser.add_argument("--demo", action="store_true", help="Run the scripted headless demo")
    parser.add_argument("--stage", help="Path to a stage YAML config")
    parser.add_argument("--keys", help="Path to a key mapping YAML config")
    parser.add_argument("--scheme", help="Key scheme to activate")
    parser.add_argument("--fps", type=int, help="Ticks per second (default: renderer target)")
    args = parser.parse_args()

    stage = load_stage_config(args.stage)

    key_config = KeyConfigLoader(args.keys) if args.keys else KeyConfigLoader()
    key_config.load_config()
    if args.scheme and not key_config.set_active_scheme(args.scheme):
        parser.error(f"Unknown key scheme: {args.scheme}")

    config = RendererConfig(
        width=80,
        height=24,
        title="Duel",
        target_fps=60
    )

    if args.demo:
        from duel.renderers.simple_renderer import SimpleRenderer
        renderer = SimpleRenderer(config)
    else:
        from duel.renderers.terminal_renderer import TerminalRenderer
        renderer = TerminalRenderer(config)

    game = Game(renderer, stage=stage, key_config=key_config, fps=args.fps)

    try:
        game.run()
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user")
    except Exception as e:
        print(f"\n\nError: {e}")
        raise
    finally:
        print("\n\nThanks for playing!")


if __name__ == "__main__":
    main()
