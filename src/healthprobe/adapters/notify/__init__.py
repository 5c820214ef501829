"""Notifier adapters implementing NotifierPort."""

from healthprobe.adapters.notify.chatwork import ChatworkNotifier, format_message

__all__ = ["ChatworkNotifier", "format_message"]
