"""
Sparse payload assembly for card updates.

Only supplied fields are copied into the body; omitting a key leaves the
remote value untouched, while sending a default would overwrite it.
"""

from trello_cli import config
from trello_cli._utils import _to_json_value
from trello_cli.fields import optional_fields
from trello_cli.models import is_supplied


def build_payload(request, presence=None):
    """Return the update body for ``request``.

    ``board`` goes out as ``idBoard``; every other field keeps its API name.
    ``idCard`` is never part of the body.
    """
    presence = presence or config.PAYLOAD_PRESENCE
    payload = {}
    for field_def in optional_fields():
        value = request.value(field_def)
        if is_supplied(value, presence):
            payload[field_def.payload_key] = _to_json_value(value)
    return payload
