import logging
from flask import current_app, has_app_context

logger = logging.getLogger("marketplace.events")


def emit(event, **fields):
    """Record a domain event on the ``marketplace.events`` logger.

    Handlers attached to that logger decide where events go; setting
    ``EVENT_LOGGING`` to false in the app config silences them entirely.
    """
    if has_app_context() and not current_app.config.get("EVENT_LOGGING", True):
        return
    logger.info("%s %s", event, fields, extra={"event": event, "fields": fields})
