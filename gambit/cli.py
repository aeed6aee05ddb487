"""
Gambit CLI - Command-line interface for the bot engine.

Usage:
    gambit draft                     Bot-vs-bot ban/pick, prints both teams
    gambit selfplay                  Two bots play on the reference engine

Both commands accept --seed for repeatable runs and --verbose for
debug logging of bot decisions.
"""

import argparse
import logging
import random
import sys

from .bots import BotConfig, BotEngine, Difficulty
from .engine_core import Reducer, create_game

logger = logging.getLogger(__name__)

BANS_PER_SIDE = 2
PICKS_PER_SIDE = 5


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Gambit - Tactical bot for an 8x10 champion chess variant",
        prog="gambit",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    difficulties = [d.value for d in Difficulty]

    # Draft command
    draft_parser = subparsers.add_parser("draft", help="Run a bot-vs-bot ban/pick")
    draft_parser.add_argument("--blue", choices=difficulties, default="medium")
    draft_parser.add_argument("--red", choices=difficulties, default="medium")

    # Selfplay command
    selfplay_parser = subparsers.add_parser("selfplay", help="Play two bots against each other")
    selfplay_parser.add_argument("--blue", choices=difficulties, default="medium")
    selfplay_parser.add_argument("--red", choices=difficulties, default="easy")
    selfplay_parser.add_argument("--rounds", type=int, default=200, help="Round limit")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "draft":
        cmd_draft(args)
    elif args.command == "selfplay":
        cmd_selfplay(args)
    else:
        parser.print_help()
        sys.exit(1)


def _make_bots(args, engine):
    rng = random.Random(args.seed)
    blue = BotEngine(engine, BotConfig.for_difficulty(args.blue), rng=random.Random(rng.random()))
    red = BotEngine(engine, BotConfig.for_difficulty(args.red), rng=random.Random(rng.random()))
    return blue, red


def run_draft(blue_bot, red_bot):
    """
    Alternating bans then alternating picks, blue first.

    Returns both teams already ordered front to back.
    """
    banned: list[str] = []
    for _ in range(BANS_PER_SIDE):
        for bot in (blue_bot, red_bot):
            choice = bot.get_ban_choice(banned)
            if choice is not None:
                banned.append(choice)

    picked: list[str] = []
    teams: dict[int, list[str]] = {0: [], 1: []}
    for _ in range(PICKS_PER_SIDE):
        for side, bot in enumerate((blue_bot, red_bot)):
            choice = bot.get_pick_choice(banned, picked, teams[side])
            if choice is not None:
                picked.append(choice)
                teams[side].append(choice)

    return banned, blue_bot.get_champion_order(teams[0]), red_bot.get_champion_order(teams[1])


def cmd_draft(args):
    """Run a draft and print the result."""
    blue_bot, red_bot = _make_bots(args, Reducer())
    banned, blue_team, red_team = run_draft(blue_bot, red_bot)

    print(f"Bans: {', '.join(banned)}")
    print(f"Blue ({args.blue}): {', '.join(blue_team)}")
    print(f"Red ({args.red}): {', '.join(red_team)}")


def cmd_selfplay(args):
    """Draft, then play until the game ends or the round limit is reached."""
    engine = Reducer()
    blue_bot, red_bot = _make_bots(args, engine)
    _, blue_team, red_team = run_draft(blue_bot, red_bot)

    state = create_game("blue", "red", blue_team, red_team)
    bots = {"blue": blue_bot, "red": red_bot}
    print(f"Blue ({args.blue}): {', '.join(blue_team)}")
    print(f"Red ({args.red}): {', '.join(red_team)}")

    while not engine.is_game_over(state) and state.current_round <= args.rounds:
        player_id = state.current_player_id
        decision = bots[player_id].decide(state, player_id)
        if decision.action is None:
            print(f"Round {state.current_round}: {player_id} has no legal action")
            break

        result = engine.apply_action(state, decision.action)
        if not result.success:
            # Bots only return validated actions
            logger.error("Engine rejected %s: %s", decision.action, result.error)
            sys.exit(1)

        print(f"Round {state.current_round} {player_id}: {decision.action} [{decision.phase.value}]")
        state = result.new_state

    if engine.is_game_over(state):
        winner = engine.get_winner(state)
        print(f"Game over: {winner + ' wins' if winner else 'draw'}")
    else:
        print(f"Stopped at round {state.current_round}")


if __name__ == "__main__":
    main()
