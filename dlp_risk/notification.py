# Copyright 2023 Google LLC. This software is provided as-is, without warranty
# or representation for any use or purpose. Your use of it is subject to your
# agreement with Google.
"""Waits for the Pub/Sub notification published when a DLP job finishes."""

import logging
import threading
import time
from typing import List, Optional

from google.api_core.exceptions import DeadlineExceeded
from google.cloud import pubsub_v1

from dlp_risk.errors import WaitCancelledError, WaitTimeoutError
from dlp_risk.request import Notification

logger = logging.getLogger(__name__)

# Attribute set by DLP on the messages published by the pub_sub action.
JOB_NAME_ATTRIBUTE = "DlpJobName"
# Seconds to wait for a matching notification before giving up.
DEFAULT_TIMEOUT = 600
# Messages requested per pull.
MAX_MESSAGES = 10
# Upper bound in seconds for a single pull call.
PULL_TIMEOUT = 30


class CompletionWaiter:
    """Pulls job notifications from a subscription until the job is done."""

    def __init__(self, notification: Notification,
                 subscriber: pubsub_v1.SubscriberClient = None):
        """Initializes the class with the required data.

        Args:
            notification: The topic and subscription the job publishes to.
            subscriber: The Pub/Sub subscriber client. Optional. A new
                SubscriberClient is created if None.
        """
        self.subscriber = subscriber or pubsub_v1.SubscriberClient()
        self.subscription_path = self.subscriber.subscription_path(
            notification.project_id, notification.subscription_id)

    def wait(self, job_name: str, timeout: Optional[float] = DEFAULT_TIMEOUT,
             cancel_event: Optional[threading.Event] = None) -> None:
        """Blocks until a notification for the job is received.

        Every pulled message is acknowledged, whether or not it refers to
        the job.

        Args:
            job_name: The name of the job returned on creation.
            timeout: Seconds to wait before raising WaitTimeoutError. None
                waits with no bound.
            cancel_event: Set from another thread to stop waiting. Optional.

        Raises:
            WaitTimeoutError: The deadline passed without a match.
            WaitCancelledError: The cancel_event was set.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        logger.info("Waiting for job %s on %s.", job_name,
                    self.subscription_path)
        while True:
            if cancel_event is not None and cancel_event.is_set():
                raise WaitCancelledError(job_name)
            pull_timeout = PULL_TIMEOUT
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise WaitTimeoutError(job_name, timeout)
                pull_timeout = min(pull_timeout, remaining)

            if self.process_messages(self.pull(pull_timeout), job_name):
                logger.info("Received notification for job %s.", job_name)
                return

    def pull(self, timeout: float) -> List[pubsub_v1.types.ReceivedMessage]:
        """Pulls a batch of messages. An expired pull yields an empty batch."""
        try:
            response = self.subscriber.pull(
                request={"subscription": self.subscription_path,
                         "max_messages": MAX_MESSAGES},
                retry=None,
                timeout=timeout)
        except DeadlineExceeded:
            return []
        return list(response.received_messages)

    def process_messages(self, received: List[pubsub_v1.types.ReceivedMessage],
                         job_name: str) -> bool:
        """Acknowledges a batch and reports whether it names the job.

        Args:
            received: The messages returned by a pull.
            job_name: The name of the job being waited on.

        Returns:
            True if any message carries the job name.
        """
        if not received:
            return False
        matched = False
        for received_message in received:
            attributes = received_message.message.attributes
            if attributes.get(JOB_NAME_ATTRIBUTE) == job_name:
                matched = True
            else:
                logger.debug("Ignoring notification %s.",
                             received_message.message.message_id)
        self.subscriber.acknowledge(
            request={"subscription": self.subscription_path,
                     "ack_ids": [message.ack_id for message in received]},
            retry=None)
        return matched
