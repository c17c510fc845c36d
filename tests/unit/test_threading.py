"""
Tests for the RequestWorker and RequestController classes.
"""

import threading

from fittrack_core.api_client import ApiResult
from fittrack_core.threading import RequestController, RequestWorker


class TestRequestWorker:
    """Test the worker thread."""

    def test_emits_result(self, qtbot):
        """Test that the job's result is emitted."""
        result = ApiResult(success=True, data={"msg": "ok"})
        worker = RequestWorker(lambda: result, label="test")

        with qtbot.waitSignal(worker.requestCompleted, timeout=2000) as blocker:
            worker.start()
        worker.wait(1000)

        assert blocker.args == [result]

    def test_emits_error(self, qtbot):
        """Test that an exception in the job becomes an error signal."""

        def job():
            raise KeyError("fullname")

        worker = RequestWorker(job, label="test")

        with qtbot.waitSignal(worker.requestError, timeout=2000) as blocker:
            worker.start()
        worker.wait(1000)

        assert blocker.args[0] == "KeyError"

    def test_runs_off_the_ui_thread(self, qtbot):
        """Test that the job does not run on the calling thread."""
        seen = []

        def job():
            seen.append(threading.get_ident())
            return ApiResult(success=True)

        worker = RequestWorker(job)
        with qtbot.waitSignal(worker.requestCompleted, timeout=2000):
            worker.start()
        worker.wait(1000)

        assert seen and seen[0] != threading.get_ident()


class TestRequestController:
    """Test the controller lifecycle."""

    def test_controller_creation(self, qapp):
        """Test that controller can be created."""
        controller = RequestController()
        assert controller.current_worker is None
        assert not controller.is_running()

    def test_result_then_finished(self, qtbot):
        """Test that the result arrives before the worker is released."""
        controller = RequestController()
        order = []
        controller.requestCompleted.connect(lambda r: order.append("completed"))
        controller.requestFinished.connect(lambda: order.append("finished"))

        with qtbot.waitSignal(controller.requestFinished, timeout=2000):
            assert controller.start(lambda: ApiResult(success=True))

        assert order == ["completed", "finished"]
        assert controller.current_worker is None

    def test_prevent_concurrent_requests(self, qtbot):
        """Test that a second job is refused while one runs."""
        release = threading.Event()

        def slow_job():
            release.wait(2)
            return ApiResult(success=True)

        controller = RequestController()
        assert controller.start(slow_job)
        first_worker = controller.current_worker

        assert controller.start(lambda: ApiResult(success=True)) is False
        assert controller.current_worker is first_worker

        with qtbot.waitSignal(controller.requestFinished, timeout=3000):
            release.set()

    def test_can_start_again_after_finish(self, qtbot):
        """Test that the controller is free after requestFinished."""
        controller = RequestController()
        with qtbot.waitSignal(controller.requestFinished, timeout=2000):
            controller.start(lambda: ApiResult(success=True))

        with qtbot.waitSignal(controller.requestFinished, timeout=2000):
            assert controller.start(lambda: ApiResult(success=False, error="x"))

    def test_shutdown_waits(self, qtbot):
        """Test that shutdown waits for the running request."""
        controller = RequestController()
        controller.start(lambda: ApiResult(success=True))

        controller.shutdown(2000)

        assert not controller.is_running()
        qtbot.waitUntil(lambda: controller.current_worker is None, timeout=2000)
