from src.app.services.notifier import Notifier
from src.app.services.user_messages import (
    NOT_SELECTED,
    READ_FAILURE,
    VALIDATION_FAILURE,
    WRITE_FAILURE,
    message_for,
)


def test_messages_never_carry_raw_text():
    assert message_for(WRITE_FAILURE, "update", "customer segment") == (
        "Could not save the customer segment. Please try again."
    )
    assert message_for(WRITE_FAILURE, "remove", "task") == "Could not delete the task. Please try again."
    assert message_for(READ_FAILURE, "load", "task") == "Could not load the task list. Please try again."
    assert message_for(VALIDATION_FAILURE, "create", "channel") == (
        "Please fill in the required fields of the channel."
    )
    assert message_for(NOT_SELECTED, "update", "feature") == "Select a feature first."
    assert message_for("duplicate key value violates constraint") == (
        "Something went wrong. Please try again."
    )


def test_notices_can_be_dismissed():
    notifier = Notifier()
    seen = []
    notifier.on_notice(seen.append)

    first = notifier.notify("Could not save the task. Please try again.", code=WRITE_FAILURE)
    second = notifier.success("Saved")

    assert [notice.level for notice in notifier.notices] == ["error", "success"]
    assert seen == [first, second]
    assert notifier.dismiss(first.id) is True
    assert notifier.dismiss(first.id) is False
    assert notifier.notices == [second]

    notifier.clear()
    assert notifier.notices == []


def test_oldest_notices_are_dropped_past_the_limit():
    notifier = Notifier(max_notices=3)

    for index in range(5):
        notifier.notify(f"Notice {index}")

    assert [notice.message for notice in notifier.notices] == ["Notice 2", "Notice 3", "Notice 4"]
    assert [notice.id for notice in notifier.notices] == [3, 4, 5]
