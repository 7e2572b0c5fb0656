from .device_shutdown_handler import DeviceShutdownHandler
from .dispatcher_shutdown_handler import DispatcherShutdownHandler
from .task_cancellation_handler import TaskCancellationHandler

__all__ = [
    "DeviceShutdownHandler",
    "DispatcherShutdownHandler",
    "TaskCancellationHandler",
]
