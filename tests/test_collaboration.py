"""
Unit tests for travelflow/api/services/collaboration_service.py
"""
from datetime import datetime, timedelta, timezone

import pytest

from travelflow.api.errors import NotFoundError, ValidationError
from travelflow.api.services.collaboration_service import (
    CollaborationService,
    poll_results,
    relative_time,
)

PLAN = "plan-abc"


@pytest.fixture
def service(store):
    return CollaborationService(store)


@pytest.fixture
def poll(service):
    return service.create_poll(PLAN, "민지", "저녁 메뉴", ["삼겹살", "회", "  "])


class TestComments:

    def test_newest_first(self, service):
        service.add_comment(PLAN, "민지", "첫 댓글")
        service.add_comment(PLAN, "준호", "두번째", day=2, activity_id="activity-1-0")

        comments = service.board(PLAN)["comments"]
        assert [c["content"] for c in comments] == ["두번째", "첫 댓글"]
        assert comments[0]["day"] == 2
        assert comments[0]["activity_id"] == "activity-1-0"

    def test_blank_content_rejected(self, service):
        with pytest.raises(ValidationError):
            service.add_comment(PLAN, "민지", "   ")

    def test_boards_are_per_plan(self, service):
        service.add_comment(PLAN, "민지", "hi")
        assert service.board("other-plan")["comments"] == []


class TestPolls:

    def test_blank_options_dropped(self, poll):
        assert [o["text"] for o in poll["options"]] == ["삼겹살", "회"]
        assert poll["active"] is True

    def test_needs_two_options(self, service):
        with pytest.raises(ValidationError):
            service.create_poll(PLAN, "민지", "제목", ["하나", " "])

    def test_needs_title(self, service):
        with pytest.raises(ValidationError):
            service.create_poll(PLAN, "민지", " ", ["a", "b"])

    def test_single_choice_moves_vote(self, service, poll):
        first, second = (o["id"] for o in poll["options"])
        service.vote(PLAN, poll["id"], first, "u1")
        updated = service.vote(PLAN, poll["id"], second, "u1")

        assert [o["votes"] for o in updated["options"]] == [[], ["u1"]]

    def test_multiple_choice_toggles(self, service):
        poll = service.create_poll(PLAN, "민지", "갈 곳", ["a", "b", "c"], multiple_choice=True)
        a, b, _ = (o["id"] for o in poll["options"])

        service.vote(PLAN, poll["id"], a, "u1")
        service.vote(PLAN, poll["id"], b, "u1")
        updated = service.vote(PLAN, poll["id"], a, "u1")

        assert [o["votes"] for o in updated["options"]] == [[], ["u1"], []]

    def test_closed_poll_rejects_votes(self, service, poll):
        service.close_poll(PLAN, poll["id"])
        with pytest.raises(ValidationError):
            service.vote(PLAN, poll["id"], poll["options"][0]["id"], "u1")

    def test_expired_poll_rejects_votes(self, service):
        past = (datetime.now(timezone.utc) - timedelta(hours=1)).isoformat()
        poll = service.create_poll(PLAN, "민지", "마감", ["a", "b"], end_time=past)
        with pytest.raises(ValidationError):
            service.vote(PLAN, poll["id"], poll["options"][0]["id"], "u1")

    def test_invalid_end_time(self, service):
        with pytest.raises(ValidationError):
            service.create_poll(PLAN, "민지", "마감", ["a", "b"], end_time="tomorrow")

    def test_unknown_ids(self, service, poll):
        with pytest.raises(NotFoundError):
            service.vote(PLAN, "poll-missing", "x", "u1")
        with pytest.raises(NotFoundError):
            service.vote(PLAN, poll["id"], "opt-missing", "u1")

    def test_results_round_percentages(self, service):
        poll = service.create_poll(PLAN, "민지", "셋", ["a", "b"])
        a, b = (o["id"] for o in poll["options"])
        service.vote(PLAN, poll["id"], a, "u1")
        service.vote(PLAN, poll["id"], a, "u2")
        poll = service.vote(PLAN, poll["id"], b, "u3")

        results = poll_results(poll, "u3")
        assert results["total_votes"] == 3
        assert [o["percentage"] for o in results["options"]] == [67, 33]
        assert results["has_voted"] is True
        assert poll_results(poll, "nobody")["has_voted"] is False

    def test_results_without_votes(self, poll):
        assert [o["percentage"] for o in poll_results(poll)["options"]] == [0, 0]


class TestRelativeTime:

    NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize("delta, expected", [
        (timedelta(seconds=30), "방금 전"),
        (timedelta(minutes=5), "5분 전"),
        (timedelta(hours=3, minutes=10), "3시간 전"),
        (timedelta(days=2, hours=1), "2일 전"),
    ])
    def test_buckets(self, delta, expected):
        assert relative_time((self.NOW - delta).isoformat(), self.NOW) == expected

    def test_accepts_z_suffix(self):
        assert relative_time("2024-05-01T11:00:00Z", self.NOW) == "1시간 전"
