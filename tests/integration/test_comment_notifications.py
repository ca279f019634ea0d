"""Integration tests for comment notification fan-out."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from app.core.automation.exceptions import TaskNotFoundError
from app.core.comments.service import CommentService
from app.models.comment import Comment
from app.models.notification import Notification, NotificationType
from app.models.user import User


@pytest.fixture
def comment_service(db_session):
    """Create CommentService instance."""
    return CommentService(db_session)


@pytest.fixture
def third_user(db_session):
    user = User(id=uuid4(), email="reviewer@example.com", name="Rita Reviewer")
    db_session.add(user)
    db_session.commit()
    return user


def notifications(db_session):
    return db_session.query(Notification).all()


@pytest.mark.asyncio
async def test_author_assignee_and_owner_same_user(comment_service, db_session, test_user, test_task):
    """Nobody is notified when the owner comments on their own task."""
    test_task.assignee_id = test_user.id
    db_session.commit()

    await comment_service.create_comment(test_task.id, "Done", test_user)

    assert notifications(db_session) == []
    assert db_session.query(Comment).count() == 1


@pytest.mark.asyncio
async def test_assignee_owner_and_author_all_different(
    comment_service, db_session, test_user, other_user, third_user, test_task
):
    test_task.assignee_id = other_user.id
    db_session.commit()

    await comment_service.create_comment(test_task.id, "Looks good", third_user)

    sent = notifications(db_session)
    assert sorted(n.recipient_id for n in sent) == sorted([other_user.id, test_user.id])
    for notification in sent:
        assert notification.type == NotificationType.TASK_COMMENT.value
        assert notification.message == 'Rita Reviewer commented on task "Write release notes"'
        assert notification.context_id == str(test_task.id)
        assert notification.context_type == "task"


@pytest.mark.asyncio
async def test_assignee_is_owner(comment_service, db_session, test_user, other_user, test_task):
    test_task.assignee_id = test_user.id
    db_session.commit()

    await comment_service.create_comment(test_task.id, "Question", other_user)

    sent = notifications(db_session)
    assert len(sent) == 1
    assert sent[0].recipient_id == test_user.id


@pytest.mark.asyncio
async def test_unassigned_task_notifies_owner(comment_service, db_session, test_user, other_user, test_task):
    await comment_service.create_comment(test_task.id, "Who takes this?", other_user)

    assert [n.recipient_id for n in notifications(db_session)] == [test_user.id]


@pytest.mark.asyncio
async def test_notification_channel_called_with_context(db_session, test_user, other_user, test_task):
    channel = AsyncMock()
    service = CommentService(db_session, notification_service=channel)

    await service.create_comment(test_task.id, "Ping", other_user)

    channel.send_notification.assert_awaited_once_with(
        test_user.id,
        NotificationType.TASK_COMMENT,
        'Max Member commented on task "Write release notes"',
        {"id": test_task.id, "type": "task"},
    )


@pytest.mark.asyncio
async def test_comment_on_missing_task(comment_service, test_user, db_session):
    with pytest.raises(TaskNotFoundError):
        await comment_service.create_comment(uuid4(), "Hello?", test_user)
    assert db_session.query(Comment).count() == 0
