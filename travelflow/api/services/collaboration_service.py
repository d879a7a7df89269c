# travelflow/api/services/collaboration_service.py
"""Comments, polls and votes attached to a shared plan."""

import logging
import threading
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from travelflow.api.errors import NotFoundError, ValidationError
from travelflow.api.storage import COLLABORATION_KEY

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def relative_time(timestamp: str, now: Optional[datetime] = None) -> str:
    """Render an ISO timestamp as '방금 전' / 'N분 전' / 'N시간 전' / 'N일 전'."""
    now = now or _now()
    minutes = int((now - _parse_timestamp(timestamp)).total_seconds() // 60)
    if minutes < 1:
        return "방금 전"
    if minutes < 60:
        return f"{minutes}분 전"
    if minutes < 1440:
        return f"{minutes // 60}시간 전"
    return f"{minutes // 1440}일 전"


def poll_results(poll: Dict[str, Any], user_id: Optional[str] = None) -> Dict[str, Any]:
    """Per-option counts and rounded percentages for a poll."""
    total = sum(len(opt["votes"]) for opt in poll["options"])
    options = []
    for opt in poll["options"]:
        count = len(opt["votes"])
        options.append({
            "id": opt["id"],
            "text": opt["text"],
            "votes": count,
            "percentage": round(count / total * 100) if total else 0,
        })
    return {
        "poll_id": poll["id"],
        "total_votes": total,
        "options": options,
        "has_voted": bool(user_id) and any(user_id in opt["votes"] for opt in poll["options"]),
    }


class CollaborationService:
    """Keeps one board (comments + polls) per plan id in a key-value store."""

    def __init__(self, store):
        self.store = store
        # read-modify-write on a board must not interleave
        self._lock = threading.RLock()

    def board(self, plan_id: str) -> Dict[str, Any]:
        board = self.store.get(COLLABORATION_KEY.format(plan_id=plan_id))
        return board or {"plan_id": plan_id, "comments": [], "polls": []}

    def _save(self, board: Dict[str, Any]) -> None:
        self.store.set(COLLABORATION_KEY.format(plan_id=board["plan_id"]), board)

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------
    def add_comment(self, plan_id: str, author: str, content: str,
                    day: Optional[int] = None, activity_id: Optional[str] = None,
                    author_avatar: str = "👤") -> Dict[str, Any]:
        content = (content or "").strip()
        if not content:
            raise ValidationError("댓글 내용을 입력해주세요.")

        comment = {
            "id": f"comment-{time.time_ns()}",
            "author": author,
            "author_avatar": author_avatar,
            "content": content,
            "timestamp": _now().isoformat(),
            "day": day,
            "activity_id": activity_id,
        }
        with self._lock:
            board = self.board(plan_id)
            board["comments"].insert(0, comment)
            self._save(board)
        logger.debug(f"Comment added to {plan_id} by {author}")
        return comment

    # ------------------------------------------------------------------
    # Polls
    # ------------------------------------------------------------------
    def create_poll(self, plan_id: str, creator: str, title: str, options: List[str],
                    description: str = "", multiple_choice: bool = False,
                    anonymous: bool = False, end_time: Optional[str] = None,
                    creator_avatar: str = "👤") -> Dict[str, Any]:
        if not (title or "").strip():
            raise ValidationError("투표 제목을 입력해주세요.")

        texts = [str(o).strip() for o in options or [] if str(o).strip()]
        if len(texts) < 2:
            raise ValidationError("최소 2개의 선택지를 입력해주세요.")

        if end_time:
            try:
                _parse_timestamp(end_time)
            except ValueError as exc:
                raise ValidationError(f"Invalid end_time: {end_time}") from exc

        stamp = time.time_ns()
        poll = {
            "id": f"poll-{stamp}",
            "title": title.strip(),
            "description": description or "",
            "creator": creator,
            "creator_avatar": creator_avatar,
            "options": [
                {"id": f"opt-{stamp}-{i}", "text": text, "votes": []}
                for i, text in enumerate(texts)
            ],
            "multiple_choice": bool(multiple_choice),
            "anonymous": bool(anonymous),
            "end_time": end_time or None,
            "active": True,
            "created_at": _now().isoformat(),
        }
        with self._lock:
            board = self.board(plan_id)
            board["polls"].insert(0, poll)
            self._save(board)
        logger.info(f"Poll '{poll['title']}' created on {plan_id}")
        return poll

    def vote(self, plan_id: str, poll_id: str, option_id: str, user_id: str) -> Dict[str, Any]:
        """Cast or toggle a vote.

        Single-choice polls move the user's vote to ``option_id``;
        multiple-choice polls toggle the user's vote on that option only.
        """
        with self._lock:
            board = self.board(plan_id)
            poll = _find_poll(board, poll_id)
            if not self.is_open(poll):
                raise ValidationError("종료된 투표입니다.")
            if not any(opt["id"] == option_id for opt in poll["options"]):
                raise NotFoundError(f"Option '{option_id}' not found in {poll_id}")

            for opt in poll["options"]:
                if poll["multiple_choice"]:
                    if opt["id"] == option_id:
                        if user_id in opt["votes"]:
                            opt["votes"].remove(user_id)
                        else:
                            opt["votes"].append(user_id)
                else:
                    opt["votes"] = [v for v in opt["votes"] if v != user_id]
                    if opt["id"] == option_id:
                        opt["votes"].append(user_id)

            self._save(board)
        return poll

    def close_poll(self, plan_id: str, poll_id: str) -> Dict[str, Any]:
        with self._lock:
            board = self.board(plan_id)
            poll = _find_poll(board, poll_id)
            poll["active"] = False
            self._save(board)
        logger.info(f"Poll {poll_id} closed on {plan_id}")
        return poll

    @staticmethod
    def is_open(poll: Dict[str, Any], now: Optional[datetime] = None) -> bool:
        if not poll.get("active"):
            return False
        if poll.get("end_time"):
            return (now or _now()) < _parse_timestamp(poll["end_time"])
        return True


def _find_poll(board: Dict[str, Any], poll_id: str) -> Dict[str, Any]:
    for poll in board["polls"]:
        if poll["id"] == poll_id:
            return poll
    raise NotFoundError(f"Poll '{poll_id}' not found")


__all__ = ['CollaborationService', 'poll_results', 'relative_time']
