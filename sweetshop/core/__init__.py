"""Core building blocks: configuration, pricing, notifications, storage."""
