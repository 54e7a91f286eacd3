"""
Simple Pub/Sub Message Bus (Stub for ROS 2)

Synchronous publish/subscribe plus request/response services, enough to
exercise the controller wiring without a middleware.
"""

import logging
import threading
from collections import defaultdict

logger = logging.getLogger(__name__)


class MessageBus:
    def __init__(self):
        self._subscribers = defaultdict(list)
        self._services = {}
        self._lock = threading.Lock()

    def subscribe(self, topic, callback):
        """Subscribe to a topic."""
        with self._lock:
            self._subscribers[topic].append(callback)

    def publish(self, topic, message):
        """Publish a message to a topic (Synchronous delivery)."""
        with self._lock:
            # Copy list to avoid modification during iteration
            callbacks = list(self._subscribers[topic])

        for callback in callbacks:
            try:
                callback(message)
            except Exception:
                logger.exception(f'Exception in callback for {topic}')

    def advertise(self, name, handler):
        """Register the handler answering requests on a service name."""
        with self._lock:
            if name in self._services:
                raise ValueError(f'Service {name} already advertised')
            self._services[name] = handler

    def service_ready(self, name):
        with self._lock:
            return name in self._services

    def call(self, name, request):
        """Call a service synchronously; raises LookupError if nobody serves it."""
        with self._lock:
            handler = self._services.get(name)
        if handler is None:
            raise LookupError(f'Service {name} not available')
        return handler(request)
