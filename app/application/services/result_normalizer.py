"""Projections from gateway read-models to search candidates and typed results.

Each mapping is pure and total for a well-formed record.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from app.application.dtos.comment import CommentRecord
from app.application.dtos.meeting import MeetingRecord
from app.application.dtos.post import PostRecord
from app.application.dtos.search import (
    CommentSearchResult,
    MeetingSearchResult,
    PostSearchResult,
    SearchCandidate,
    UserSearchResult,
)
from app.application.dtos.user import UserRecord
from app.domain.enums import SearchType


def meeting_to_candidate(m: MeetingRecord) -> SearchCandidate:
    return SearchCandidate(
        id=m.id,
        title=m.title,
        content=m.description,
        type=SearchType.MEETING,
        author_name=m.organizer_name,
        created_date=m.created_at,
        last_modified_date=m.updated_at,
        metadata={
            "location": m.location,
            "start_date_time": m.start_date_time,
            "end_date_time": m.end_date_time,
            "attendee_count": m.attendee_count,
        },
    )


def post_to_candidate(p: PostRecord) -> SearchCandidate:
    return SearchCandidate(
        id=p.id,
        title=p.title,
        content=p.content,
        type=SearchType.POST,
        author_name=p.author_name,
        created_date=p.created_at,
        last_modified_date=p.updated_at,
        metadata={
            "meeting_id": p.meeting_id,
            "meeting_title": p.meeting_title,
            "comment_count": p.comment_count,
        },
    )


def comment_to_candidate(c: CommentRecord) -> SearchCandidate:
    """Comments have no title; they match and score on content only."""
    return SearchCandidate(
        id=c.id,
        title="",
        content=c.content,
        type=SearchType.COMMENT,
        author_name=c.author_name,
        created_date=c.created_at,
        last_modified_date=c.updated_at,
        metadata={
            "post_id": c.post_id,
            "post_title": c.post_title,
            "parent_comment_id": c.parent_comment_id,
            "is_reply": c.is_reply,
        },
    )


def user_to_candidate(u: UserRecord) -> SearchCandidate:
    return SearchCandidate(
        id=u.id,
        title=u.full_name,
        content=u.email,
        type=SearchType.USER,
        author_name=u.full_name,
        created_date=u.created_at,
        last_modified_date=u.updated_at,
        metadata={},
    )


def meeting_to_result(m: MeetingRecord, score: float) -> MeetingSearchResult:
    return MeetingSearchResult(
        id=m.id,
        title=m.title,
        description=m.description,
        start_date_time=m.start_date_time,
        end_date_time=m.end_date_time,
        location=m.location,
        organizer_name=m.organizer_name,
        attendee_count=m.attendee_count,
        is_active=m.is_active,
        created_date=m.created_at,
        relevance_score=score,
    )


def post_to_result(p: PostRecord, score: float) -> PostSearchResult:
    return PostSearchResult(
        id=p.id,
        title=p.title,
        content=p.content,
        author_name=p.author_name,
        meeting_id=p.meeting_id,
        meeting_title=p.meeting_title,
        comment_count=p.comment_count,
        is_active=p.is_active,
        created_date=p.created_at,
        relevance_score=score,
    )


def comment_to_result(c: CommentRecord, score: float) -> CommentSearchResult:
    return CommentSearchResult(
        id=c.id,
        content=c.content,
        author_name=c.author_name,
        post_id=c.post_id,
        post_title=c.post_title,
        parent_comment_id=c.parent_comment_id,
        is_reply=c.is_reply,
        is_active=c.is_active,
        created_date=c.created_at,
        relevance_score=score,
    )


def user_to_result(u: UserRecord, score: float) -> UserSearchResult:
    return UserSearchResult(
        id=u.id,
        first_name=u.first_name,
        last_name=u.last_name,
        email=u.email,
        is_active=u.is_active,
        created_date=u.created_at,
        relevance_score=score,
    )


CANDIDATE_MAPPERS: dict[SearchType, Callable[[Any], SearchCandidate]] = {
    SearchType.MEETING: meeting_to_candidate,
    SearchType.POST: post_to_candidate,
    SearchType.COMMENT: comment_to_candidate,
    SearchType.USER: user_to_candidate,
}


def to_candidate(search_type: SearchType, record: Any) -> SearchCandidate:
    """Normalize a gateway record of the given type."""
    return CANDIDATE_MAPPERS[search_type](record)
