from linkshortener.models.short_url_model import ShortURLModel
from linkshortener.models.short_link_model import ShortLinkModel
from linkshortener.models.event_model import EventModel


__all__ = [
    'ShortURLModel',
    'ShortLinkModel',
    'EventModel',
]
