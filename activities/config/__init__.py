from activities.config.settings import settings

__all__ = ["settings"]
