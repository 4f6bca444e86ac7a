"""
Notification Service

Best-effort change notifications for grocery lists. Connected clients
subscribe through whatever realtime transport is wired to the signal;
nothing in the grocery logic depends on delivery.
"""

import logging

from blinker import Namespace

logger = logging.getLogger(__name__)

_signals = Namespace()

# Sent with sender=<channel name>, plus week_start=<date> and action=<str>
grocery_list_changed = _signals.signal('grocery-list-changed')

GROCERY_ACTIONS = {
    'generated', 'item_added', 'item_updated', 'item_deleted', 'cleared_checked', 'deleted',
}


def grocery_channel(week_start):
    """Realtime channel name for a week's grocery list."""
    return f"grocery-list:{week_start.isoformat()}"


def notify_grocery_change(week_start, action, **payload):
    """
    Broadcast a grocery list change to subscribers of the week's channel.

    Subscriber errors are logged, never raised. Returns the number of
    subscribers that handled the change.
    """
    if action not in GROCERY_ACTIONS:
        raise ValueError(f"Unknown grocery action: {action}")
    if not grocery_list_changed.receivers:
        return 0

    channel = grocery_channel(week_start)
    delivered = 0
    for receiver in list(grocery_list_changed.receivers_for(channel)):
        try:
            receiver(channel, week_start=week_start, action=action, **payload)
            delivered += 1
        except Exception:
            logger.warning("Grocery notification subscriber failed on %s", channel, exc_info=True)
    return delivered
