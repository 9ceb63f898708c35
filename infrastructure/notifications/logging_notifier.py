"""
SessionNotifier that writes session events to the log.

Used by the API host, where device effects (beeps, vibration) happen on the
client from the snapshot stream rather than on the server.
"""
import logging

from application.ports import SessionEvent, SessionEventType

logger = logging.getLogger(__name__)


class LoggingSessionNotifier:
    """Logs every session event; cues at debug, everything else at info."""

    def notify(self, event: SessionEvent) -> None:
        if event.type in (SessionEventType.CUE, SessionEventType.FINAL_CUE):
            logger.debug(
                f"[{event.execution_id}] {event.type.value} at bout {event.cursor}: "
                f"{event.seconds_remaining}s remaining"
            )
            return
        logger.info(f"[{event.execution_id}] {event.type.value} at bout {event.cursor} {event.data}")
