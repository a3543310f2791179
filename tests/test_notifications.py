from notifications import COMPLETED_TITLE, STARTED_TITLE, Toast, ToastNotifier
from rest_timer import RestTimer


def test_started_toast_names_exercise():
    notifier = ToastNotifier()
    notifier.on_started(90, "Squat")
    assert notifier.toasts == [
        Toast(title="Rest Timer Started", description="90 seconds rest time for Squat"),
    ]


def test_started_toast_without_label():
    notifier = ToastNotifier()
    notifier.on_started(60, None)
    assert notifier.toasts[0].description == "60 seconds rest time for exercise"


def test_completed_toast():
    notifier = ToastNotifier()
    notifier.on_completed()
    toast = notifier.toasts[0]
    assert toast.title == "Rest Complete! 💪"
    assert toast.description == "Time to start your next set"
    assert toast.duration_ms == 5000


def test_timer_raises_toasts_in_order(scheduler):
    notifier = ToastNotifier()
    timer = RestTimer(scheduler=scheduler, notifier=notifier, tick_interval=1.0)
    timer.start(2, "Pull-up")
    scheduler.advance(2)
    assert [t.title for t in notifier.toasts] == [STARTED_TITLE, COMPLETED_TITLE]


def test_stop_raises_no_completion_toast(scheduler):
    notifier = ToastNotifier()
    timer = RestTimer(scheduler=scheduler, notifier=notifier, tick_interval=1.0)
    timer.start(5)
    scheduler.advance(2)
    timer.stop()
    scheduler.advance(10)
    assert [t.title for t in notifier.toasts] == [STARTED_TITLE]
