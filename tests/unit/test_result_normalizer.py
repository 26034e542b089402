"""Result normalizer: per-type projection into candidates and typed results."""

from app.application.services.result_normalizer import (
    comment_to_candidate,
    comment_to_result,
    meeting_to_candidate,
    post_to_candidate,
    to_candidate,
    user_to_candidate,
    user_to_result,
)
from app.domain.enums import SearchType
from tests.support import make_comment, make_meeting, make_post, make_user


def test_meeting_projection() -> None:
    m = make_meeting("Tech Discussion", "monthly meeting", location="Kampala Hub", attendee_count=3)
    c = meeting_to_candidate(m)
    assert c.type is SearchType.MEETING
    assert (c.title, c.content, c.author_name) == ("Tech Discussion", "monthly meeting", "Alice Nakato")
    assert c.metadata == {
        "location": "Kampala Hub",
        "start_date_time": m.start_date_time,
        "end_date_time": m.end_date_time,
        "attendee_count": 3,
    }


def test_post_projection_carries_meeting_and_comment_count() -> None:
    p = make_post("Meeting Agenda", "topics", comment_count=2)
    c = post_to_candidate(p)
    assert c.type is SearchType.POST
    assert c.title == "Meeting Agenda"
    assert c.metadata["comment_count"] == 2
    assert c.metadata["meeting_id"] == p.meeting_id


def test_comment_projection_has_empty_title_and_reply_flag() -> None:
    reply = make_comment("Yes, I will prepare one.", parent_comment_id="c-parent")
    c = comment_to_candidate(reply)
    assert c.title == ""
    assert c.content == "Yes, I will prepare one."
    assert c.metadata["is_reply"] is True
    assert c.metadata["parent_comment_id"] == "c-parent"


def test_user_projection_uses_full_name_and_email() -> None:
    u = make_user("Carol", "Team", "carol.team@example.com")
    c = user_to_candidate(u)
    assert c.title == "Carol Team"
    assert c.content == "carol.team@example.com"
    assert c.author_name == "Carol Team"
    assert c.metadata == {}


def test_to_candidate_dispatches_by_type() -> None:
    assert to_candidate(SearchType.USER, make_user("Dan", "M")).type is SearchType.USER
    assert to_candidate(SearchType.COMMENT, make_comment("hi")).type is SearchType.COMMENT


def test_typed_results_keep_type_specific_fields() -> None:
    comment = comment_to_result(make_comment("top level"), 42.0)
    assert comment.is_reply is False
    assert comment.relevance_score == 42.0
    user = user_to_result(make_user("Carol", "Team"), 75.0)
    assert user.full_name == "Carol Team"
