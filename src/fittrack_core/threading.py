"""
Threading system for non-blocking API requests.

Requests run on a QThread so the form stays responsive while the backend
answers. Results come back to the UI thread through queued signals.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from PySide6.QtCore import QObject, Qt, QThread, Signal, Slot

from .api_client import ApiResult

logger = logging.getLogger(__name__)

RequestJob = Callable[[], ApiResult]


class RequestWorker(QThread):
    """
    QThread-based worker that runs one request job.

    Exactly one terminal signal is emitted per run:
    requestCompleted(ApiResult) when the job returns, or
    requestError(str, str) with the exception type and message when it raises.
    """

    requestCompleted = Signal(object)  # ApiResult
    requestError = Signal(str, str)  # error_type, message

    def __init__(self, job: RequestJob, *, label: str = "request", parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._job = job
        self.setObjectName(f"RequestWorker-{label}")

    def run(self) -> None:
        try:
            result = self._job()
            self.requestCompleted.emit(result)
        except Exception as e:
            logger.error(f"Unexpected error in {self.objectName()}: {e.__class__.__name__}")
            self.requestError.emit(e.__class__.__name__, str(e))


class RequestController(QObject):
    """
    Manages the lifecycle of RequestWorker threads.

    At most one request runs per controller; start() while a request is in
    flight is refused.
    """

    requestStarted = Signal()
    requestFinished = Signal()  # Emitted after cleanup
    requestCompleted = Signal(object)
    requestError = Signal(str, str)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.current_worker: RequestWorker | None = None
        self._cleanup_in_progress = False
        self.setObjectName("RequestController")

    def is_running(self) -> bool:
        """Check if a request is currently in flight."""
        return self.current_worker is not None and self.current_worker.isRunning()

    def start(self, job: RequestJob, label: str = "request") -> bool:
        """
        Start a job on a new worker thread.

        Returns:
            False if another request is still running, True otherwise
        """
        if self.current_worker is not None:
            logger.warning(f"Cannot start {label}: another request is already running")
            return False

        worker = RequestWorker(job, label=label, parent=self)
        worker.requestCompleted.connect(self.requestCompleted, Qt.ConnectionType.QueuedConnection)
        worker.requestError.connect(self.requestError, Qt.ConnectionType.QueuedConnection)
        worker.finished.connect(self._cleanup_worker, Qt.ConnectionType.QueuedConnection)
        self.current_worker = worker

        logger.debug(f"Starting {worker.objectName()}")
        self.requestStarted.emit()
        worker.start()
        return True

    @Slot()
    def _cleanup_worker(self) -> None:
        """Release the finished worker. Connected to the worker's finished signal."""
        if self._cleanup_in_progress:
            return

        self._cleanup_in_progress = True
        worker_to_clean = self.current_worker
        self.current_worker = None

        try:
            if worker_to_clean:
                try:
                    worker_to_clean.requestCompleted.disconnect(self.requestCompleted)
                    worker_to_clean.requestError.disconnect(self.requestError)
                    worker_to_clean.finished.disconnect(self._cleanup_worker)
                except (TypeError, RuntimeError):
                    logger.debug("Signals already disconnected or worker deleted.")

                if worker_to_clean.isRunning():
                    worker_to_clean.wait(1000)
                worker_to_clean.deleteLater()
        except Exception:
            logger.exception("Error during worker cleanup.")
        finally:
            self._cleanup_in_progress = False
            self.requestFinished.emit()

    def wait_for_completion(self, timeout_ms: int = 0) -> bool:
        """Wait for the current worker to finish. Used during shutdown and tests."""
        if self.current_worker:
            return self.current_worker.wait(timeout_ms) if timeout_ms else self.current_worker.wait()
        return True

    def shutdown(self, timeout_ms: int = 3000) -> None:
        """Wait for an in-flight request before the application quits."""
        if self.is_running() and not self.wait_for_completion(timeout_ms):
            logger.warning(f"Request did not finish within {timeout_ms}ms during shutdown.")
