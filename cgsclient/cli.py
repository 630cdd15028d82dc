from __future__ import annotations

import argparse
import sys
from typing import Optional

from .errors import CGSError
from .log import configure_logging
from .net.protocol import DEFAULT_HOST, DEFAULT_PORT, MAX_NAME, ReturnCode
from .snake.api import SnakeClient
from .snake.game import Arena, Move, move_from_key

RESET = "\033[0m"
BOLD = "\033[1m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"


def announce(text: str) -> None:
    print(BOLD + text + RESET)


def prompt(text: str) -> Optional[str]:
    sys.stdout.write(BOLD + text + RESET + " ")
    sys.stdout.flush()
    line = sys.stdin.readline()
    if not line:
        return None
    return line.strip()


def read_move(client: SnakeClient) -> Optional[Move]:
    while True:
        ans = prompt("Your move (N/E/S/W), '#text' to comment, 'q' to quit:")
        if ans is None or ans.lower() == "q":
            return None
        if ans.startswith("#"):
            client.send_comment(ans[1:].strip())
            continue
        move = move_from_key(ans)
        if move is None:
            print(RED + "Invalid move." + RESET)
            continue
        return move


def open_window(arena: Arena, title: str):
    # pygame is only needed for --show-arena
    from .gui import ArenaWindow

    window = ArenaWindow(arena, title)
    window.open()
    return window


def play(client: SnakeClient, game_type: str, show_arena: bool = False) -> Optional[bool]:
    # True if we won, False if we lost, None if we quit
    game = client.wait_for_snake_game(game_type)
    announce(f"Game '{game.name}': {game.size_x}x{game.size_y}, {game.nb_walls} walls")
    arena, starting_side = client.get_snake_arena()
    your_turn = starting_side == 0

    window = open_window(arena, game.name) if show_arena else None
    try:
        while True:
            client.print_arena()
            if window is not None and not window.refresh("Your turn" if your_turn else "Waiting for opponent"):
                window = None
            if your_turn:
                move = read_move(client)
                if move is None:
                    print("You quit the game.")
                    return None
                code = client.send_move(move)
                if code == ReturnCode.WINNING_MOVE:
                    announce(GREEN + "You win!" + RESET)
                    return True
                if code == ReturnCode.LOSING_MOVE:
                    announce(RED + "You lose." + RESET)
                    return False
            else:
                move, code = client.get_move()
                if move is not None:
                    print(YELLOW + f"Opponent plays {move.name}" + RESET)
                # the code is the opponent's
                if code == ReturnCode.WINNING_MOVE:
                    announce(RED + "You lose." + RESET)
                    return False
                if code == ReturnCode.LOSING_MOVE:
                    announce(GREEN + "You win!" + RESET)
                    return True
            your_turn = not your_turn
    finally:
        if window is not None:
            window.close()


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description="Snake - terminal client for the Coding Game Server")
    parser.add_argument("--host", type=str, default=DEFAULT_HOST, help="Server address")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="TCP port to connect")
    parser.add_argument("--name", type=str, required=True, help=f"Player name (max {MAX_NAME} characters)")
    parser.add_argument(
        "--game",
        type=str,
        default="",
        help="Game to wait for, e.g. 'TRAINING RANDOM_PLAYER difficulty=2 timeout=60' (default: any opponent)",
    )
    parser.add_argument("--debug", type=int, default=0, help="Debug level, 0 (quiet) to 3 (everything)")
    parser.add_argument("--show-arena", action="store_true", help="Draw the arena walls in a window")
    args = parser.parse_args(argv)

    configure_logging(args.debug)

    client = SnakeClient()
    try:
        client.connect_to_server(args.host, args.port, args.name)
        try:
            play(client, args.game, show_arena=args.show_arena)
        finally:
            if client.connection is not None and client.connection.is_open:
                client.close_connection()
    except CGSError as exc:
        print(RED + str(exc) + RESET, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print()
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
