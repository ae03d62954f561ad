"""Card field registry: single source of truth for updatable card fields.

Standalone module (no project imports). Adding a new updatable field means
appending one FieldDefinition to CARD_FIELDS.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldDefinition:
    """One updatable card field (e.g. name, idList, pos)."""

    attr: str
    api_name: str
    payload_key: str | None
    kind: str
    label: str
    description: str


CARD_FIELDS: tuple[FieldDefinition, ...] = (
    FieldDefinition(
        attr="id_card",
        api_name="idCard",
        payload_key=None,
        kind="id",
        label="Card",
        description="The ID of the card to be updated.",
    ),
    FieldDefinition(
        attr="name",
        api_name="name",
        payload_key="name",
        kind="text",
        label="Name",
        description="The new name for the card.",
    ),
    FieldDefinition(
        attr="desc",
        api_name="desc",
        payload_key="desc",
        kind="text",
        label="Description",
        description="The new description for the card.",
    ),
    FieldDefinition(
        attr="closed",
        api_name="closed",
        payload_key="closed",
        kind="bool",
        label="Closed",
        description="Whether the card should be archived (closed: true).",
    ),
    FieldDefinition(
        attr="id_members",
        api_name="idMembers",
        payload_key="idMembers",
        kind="id_list",
        label="Id Members",
        description="Member IDs to add to the card.",
    ),
    FieldDefinition(
        attr="id_attachment_cover",
        api_name="idAttachmentCover",
        payload_key="idAttachmentCover",
        kind="id",
        label="Attachment Cover",
        description="The ID of the image attachment the card should use as its cover.",
    ),
    FieldDefinition(
        attr="id_list",
        api_name="idList",
        payload_key="idList",
        kind="id",
        label="List",
        description="The ID of the list the card should be in.",
    ),
    FieldDefinition(
        attr="id_labels",
        api_name="idLabels",
        payload_key="idLabels",
        kind="id_list",
        label="Labels",
        description="Label IDs to add to the card.",
    ),
    FieldDefinition(
        attr="board",
        api_name="board",
        payload_key="idBoard",
        kind="id",
        label="Board",
        description="The ID of the board the card should be on.",
    ),
    FieldDefinition(
        attr="pos",
        api_name="pos",
        payload_key="pos",
        kind="position",
        label="Position",
        description="The position of the card. Valid values: `top`, `bottom`, or a positive float.",
    ),
    FieldDefinition(
        attr="due",
        api_name="due",
        payload_key="due",
        kind="date",
        label="Due Date",
        description="When the card is due.",
    ),
    FieldDefinition(
        attr="due_complete",
        api_name="dueComplete",
        payload_key="dueComplete",
        kind="bool",
        label="Due Complete",
        description="Whether the due date should be marked complete.",
    ),
    FieldDefinition(
        attr="subscribed",
        api_name="subscribed",
        payload_key="subscribed",
        kind="bool",
        label="Subscribed",
        description="Whether the member should be subscribed to the card.",
    ),
    FieldDefinition(
        attr="address",
        api_name="address",
        payload_key="address",
        kind="text",
        label="Address",
        description="For use with/by the Map Power-Up.",
    ),
    FieldDefinition(
        attr="location_name",
        api_name="locationName",
        payload_key="locationName",
        kind="text",
        label="Location Name",
        description="For use with/by the Map Power-Up.",
    ),
    FieldDefinition(
        attr="coordinates",
        api_name="coordinates",
        payload_key="coordinates",
        kind="coordinates",
        label="Coordinates",
        description="For use with/by the Map Power-Up. Should take the form latitude, longitude.",
    ),
    FieldDefinition(
        attr="cover",
        api_name="cover",
        payload_key="cover",
        kind="object",
        label="Cover",
        description="Updates the card's cover.",
    ),
)

_BY_ATTR = {f.attr: f for f in CARD_FIELDS}
_BY_API_NAME = {f.api_name: f for f in CARD_FIELDS}


def get_field(name):
    """Look up a field by attribute name or API name. Returns None if unknown."""
    return _BY_ATTR.get(name) or _BY_API_NAME.get(name)


def optional_fields():
    """Every field that may appear in an update payload."""
    return [f for f in CARD_FIELDS if f.payload_key is not None]
