"""Replay file loading: extension dispatch, container parsing, reconstruction hand-off"""
import json
import logging
import os
from typing import Any, Callable, Dict, List, Optional, Tuple

from viewtris_actions import Action, load_actions
from viewtris_errors import ReconstructionError, ReplayParseError, UnsupportedReplayError

logger = logging.getLogger("viewtris")

# (game_type, events) -> actions; raises ReconstructionError carrying the partial list
Reconstructor = Callable[[str, List[Dict[str, Any]]], List[Action]]

EXTENSIONS = (".ttr", ".ttrm", ".actions")


def _read_json(path: str) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        raise ReplayParseError(str(e), path) from e


def ttr_events(doc: Dict[str, Any], path: Optional[str] = None) -> Tuple[str, List[Dict[str, Any]]]:
    try:
        return doc.get("gametype", ""), list(doc["data"]["events"])
    except (KeyError, TypeError, AttributeError) as e:
        raise ReplayParseError(f"not a ttr replay ({e!r})", path) from e


def ttrm_events(doc: Dict[str, Any], path: Optional[str] = None) -> Tuple[str, List[Dict[str, Any]]]:
    """Events of the first replay of the first round."""
    try:
        return doc.get("gametype", ""), list(doc["data"][0]["replays"][0]["events"])
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        raise ReplayParseError(f"not a ttrm replay ({e!r})", path) from e


def ttrm_rounds(doc: Dict[str, Any], path: Optional[str] = None) -> List[List[List[Dict[str, Any]]]]:
    """Events of every replay, grouped by round: rounds[i][j] is replay j of round i."""
    try:
        return [[list(replay["events"]) for replay in rnd["replays"]] for rnd in doc["data"]]
    except (KeyError, TypeError, AttributeError) as e:
        raise ReplayParseError(f"not a ttrm replay ({e!r})", path) from e


CONTAINERS = {
    ".ttr": ttr_events,
    ".ttrm": ttrm_events,
}


def load_events(path: str) -> Tuple[str, List[Dict[str, Any]]]:
    ext = os.path.splitext(path)[1].lower()
    reader = CONTAINERS.get(ext)
    if reader is None:
        raise UnsupportedReplayError(f"unknown file type {ext or '(none)'!r}, expected ttr or ttrm", path)
    return reader(_read_json(path), path)


def load_match(path: str) -> Tuple[str, List[List[List[Dict[str, Any]]]]]:
    """Like load_events, but every replay of every round. A .ttr is one round of one replay."""
    ext = os.path.splitext(path)[1].lower()
    if ext == ".ttrm":
        doc = _read_json(path)
        return doc.get("gametype", "") if isinstance(doc, dict) else "", ttrm_rounds(doc, path)
    game_type, events = load_events(path)
    return game_type, [[events]]


def run_reconstructor(reconstruct: Reconstructor, game_type: str, events: List[Dict[str, Any]]) -> List[Action]:
    """Call `reconstruct`, turning any failure other than ReconstructionError into one."""
    try:
        return reconstruct(game_type, events)
    except ReconstructionError:
        raise
    except Exception as e:
        raise ReconstructionError(f"reconstructor failed: {e!r}") from e


def open_replay(path: str, reconstruct: Optional[Reconstructor] = None) -> List[Action]:
    """Load the action list for `path`.

    ``.actions`` files are read directly; ``.ttr``/``.ttrm`` containers go
    through `reconstruct`. Nothing is returned unless the whole file loaded.
    """
    ext = os.path.splitext(path)[1].lower()
    if ext == ".actions":
        try:
            with open(path, encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            raise ReplayParseError(str(e), path) from e
        actions = load_actions(text, path)
    elif ext in CONTAINERS:
        game_type, events = load_events(path)
        if reconstruct is None:
            raise ReconstructionError(f"{path}: no reconstructor configured for {ext} replays")
        actions = run_reconstructor(reconstruct, game_type, events)
    else:
        raise UnsupportedReplayError(f"unknown file type {ext or '(none)'!r}, this player only expects "
                                     f"{', '.join(EXTENSIONS)}", path)
    logger.info(f"loaded {path}: {len(actions)} actions")
    return actions
