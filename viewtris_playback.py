"""Frame cursor over a reconstructed action list"""
import logging
from typing import List, Optional, Sequence

from viewtris_actions import Action
from viewtris_board import Board

logger = logging.getLogger("viewtris")


class Playback:
    """Owns the board for one replay and feeds it actions as the frame counter moves.

    Actions before ``actions_passed`` have been applied to ``board``; the rest
    are pending. Rewinding rolls applied actions back newest first, which is
    the only order the board can undo them in.
    """

    def __init__(self, actions: Sequence[Action], board: Optional[Board] = None):
        self.board = board if board is not None else Board.empty()
        self.actions: List[Action] = list(actions)
        self.actions_passed = 0
        self.frame = 0

    @classmethod
    def empty(cls) -> "Playback":
        return cls([])

    @classmethod
    def with_actions(cls, actions: Sequence[Action]) -> "Playback":
        playback = cls(actions)
        playback.advance_actions()
        return playback

    def is_finished(self) -> bool:
        return self.actions_passed >= len(self.actions)

    def advance_frame(self) -> None:
        if not self.is_finished():
            self.frame += 1
            self.advance_actions()

    def advance_actions(self) -> int:
        applied = 0
        while self.actions_passed < len(self.actions):
            action = self.actions[self.actions_passed]
            if action.frame > self.frame:
                break
            self.board.apply_action(action.kind)
            self.actions_passed += 1
            applied += 1
        return applied

    def rewind_frame(self) -> None:
        if self.frame > 0:
            self.frame -= 1
            self.rollback_actions()

    def rollback_actions(self) -> int:
        undone = 0
        while self.actions_passed > 0:
            action = self.actions[self.actions_passed - 1]
            if action.frame <= self.frame:
                break
            self.board.rollback_action(action.kind)
            self.actions_passed -= 1
            undone += 1
        return undone

    def seek(self, frame: int) -> None:
        """Step one frame at a time until the cursor sits on `frame`."""
        frame = max(0, frame)
        while self.frame > frame:
            self.rewind_frame()
        while self.frame < frame and not self.is_finished():
            self.advance_frame()
        logger.debug(f"seek to {frame}: at frame {self.frame}, {self.actions_passed}/{len(self.actions)} actions")
