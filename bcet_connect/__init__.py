"""BCET Connect backend: notifications, feed and realtime delivery."""
