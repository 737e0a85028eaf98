"""Golden-file output: one line per reconstructed action"""
import logging
import os
from typing import Any, Dict, Iterable, List, Optional, Tuple

from viewtris_actions import Action, dump_actions
from viewtris_config import CONFIG
from viewtris_errors import ReconstructionError
from viewtris_files import Reconstructor, load_events, load_match, run_reconstructor

logger = logging.getLogger("viewtris")


def write_actions(actions: Iterable[Action], write_to: str) -> None:
    directory = os.path.dirname(write_to)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(write_to, "w", encoding="utf-8") as f:
        f.write(dump_actions(actions))


def _emit(actions: List[Action], write_to: str) -> None:
    try:
        write_actions(actions, write_to)
    except OSError as e:
        logger.error(f"could not write {write_to} ({e}), actions follow:\n{dump_actions(actions)}")


def fixture_path(name: str, round_index: int = 0, replay_index: int = 0,
                 directory: Optional[str] = None) -> str:
    directory = CONFIG["FIXTURE_DIR"] if directory is None else directory
    return os.path.join(directory, f"{name}_{round_index}_{replay_index}.out")


def _reconstruct_one(label: str, reconstruct: Reconstructor, game_type: str,
                     events: List[Dict[str, Any]], write_to: str) -> List[Action]:
    try:
        actions = run_reconstructor(reconstruct, game_type, events)
    except ReconstructionError as e:
        logger.error(f"reconstruction of {label} failed after {len(e.partial)} actions: {e}")
        _emit(e.partial, write_to)
        raise
    _emit(actions, write_to)
    logger.info(f"wrote {len(actions)} actions to {write_to}")
    return actions


def reconstruct_to_fixture(path: str, reconstruct: Reconstructor, write_to: str,
                           game_type: Optional[str] = None) -> List[Action]:
    """Reconstruct the first replay of `path` and write the action list to `write_to`.

    On ReconstructionError the partial list is written before the error is re-raised.
    `game_type` overrides the container's own tag.
    """
    container_type, events = load_events(path)
    return _reconstruct_one(path, reconstruct, game_type or container_type, events, write_to)


def reconstruct_match_to_fixtures(path: str, reconstruct: Reconstructor, name: str,
                                  directory: Optional[str] = None,
                                  game_type: Optional[str] = None
                                  ) -> Tuple[Dict[Tuple[int, int], List[Action]], List[Tuple[int, int]]]:
    """Reconstruct every replay of every round, one fixture file each.

    Replay j of round i goes to ``fixture_path(name, i, j, directory)``. A failed
    replay gets its partial list written and the rest still run. Returns the
    actions per (round, replay) and the keys that failed.
    """
    container_type, rounds = load_match(path)
    game_type = game_type or container_type
    results: Dict[Tuple[int, int], List[Action]] = {}
    failed: List[Tuple[int, int]] = []
    for i, replays in enumerate(rounds):
        for j, events in enumerate(replays):
            write_to = fixture_path(name, i, j, directory)
            try:
                results[(i, j)] = _reconstruct_one(f"{path} [{i}][{j}]", reconstruct, game_type, events, write_to)
            except ReconstructionError as e:
                results[(i, j)] = e.partial
                failed.append((i, j))
    return results, failed
