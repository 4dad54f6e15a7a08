import threading

import pytest

from inventory_ledger import settings
from inventory_ledger.session import Session, SimulatedLatency


def test_login_with_demo_credentials(store):
    session = Session(store, SimulatedLatency(delay=0))

    assert session.login(settings.DEMO_EMAIL, settings.DEMO_PASSWORD) is True
    assert session.is_authenticated
    assert session.user_email == settings.DEMO_EMAIL

    session.logout()
    assert not session.is_authenticated
    assert session.user_email is None


@pytest.mark.parametrize(
    "email, password",
    [
        ("admin@gmail.com", "wrong"),
        ("ADMIN@gmail.com", "Admin@1234"),
        ("", ""),
    ],
)
def test_login_rejects_anything_but_exact_match(store, email, password):
    session = Session(store, SimulatedLatency(delay=0), email="admin@gmail.com", password="Admin@1234")

    assert session.login(email, password) is False
    assert not session.is_authenticated


def test_login_async_reports_result_after_delay(store):
    session = Session(store, SimulatedLatency(delay=0))
    results = []
    done = threading.Event()

    def on_done(success):
        results.append(success)
        done.set()

    session.login_async(settings.DEMO_EMAIL, settings.DEMO_PASSWORD, on_done)

    assert done.wait(timeout=5)
    assert results == [True]
    assert session.is_authenticated


def test_report_is_delivered_after_delay(store):
    session = Session(store, SimulatedLatency(delay=0))
    delivered = []
    done = threading.Event()

    def on_ready(report):
        delivered.append(report)
        done.set()

    timer = session.generate_report_async(on_ready, start_date="2024-01-01")

    assert done.wait(timeout=5)
    timer.join(timeout=5)
    assert delivered[0].summary.total_deposits == 20
    assert session.latency.pending == 0


def test_closing_session_cancels_pending_report(store):
    session = Session(store, SimulatedLatency(delay=30))
    delivered = []

    session.login(settings.DEMO_EMAIL, settings.DEMO_PASSWORD)
    timer = session.generate_report_async(delivered.append)
    assert session.latency.pending == 1

    session.close()
    timer.join(timeout=5)

    assert not timer.is_alive()
    assert delivered == []
    assert session.latency.pending == 0
    assert not session.is_authenticated


def test_closed_latency_refuses_new_work():
    latency = SimulatedLatency(delay=0)
    latency.close()

    assert latency.closed
    with pytest.raises(RuntimeError):
        latency.schedule(lambda: None)


def test_session_context_manager_closes(store):
    with Session(store, SimulatedLatency(delay=30)) as session:
        session.generate_report_async(lambda report: None)

    assert session.latency.closed
    assert session.latency.pending == 0


def test_invalid_report_dates_raise_before_scheduling(store):
    session = Session(store, SimulatedLatency(delay=30))

    with pytest.raises(ValueError):
        session.generate_report_async(lambda report: None, end_date="yesterday")

    assert session.latency.pending == 0
    session.close()


def test_close_waits_for_a_delivery_in_progress():
    latency = SimulatedLatency(delay=0)
    started = threading.Event()
    release = threading.Event()
    delivered = []

    def slow_callback(value):
        started.set()
        release.wait(timeout=5)
        delivered.append(value)

    latency.schedule(slow_callback, "report")
    assert started.wait(timeout=5)

    closer = threading.Thread(target=latency.close)
    closer.start()
    closer.join(timeout=0.2)
    assert closer.is_alive()

    release.set()
    closer.join(timeout=5)

    assert not closer.is_alive()
    assert delivered == ["report"]
    assert latency.closed


def test_callback_due_after_close_is_dropped():
    latency = SimulatedLatency(delay=0.05)
    delivered = []

    timer = latency.schedule(delivered.append, "late")
    latency.close()
    timer.join(timeout=5)

    assert delivered == []
    assert latency.pending == 0
