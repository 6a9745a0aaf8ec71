"""Static locator map for the ATIP request form"""

from dataclasses import dataclass
from enum import Enum


class FieldKind(Enum):
    TEXT = "text"  # filled as plain text
    SELECT = "select"  # option chosen by exact visible label


@dataclass(frozen=True)
class FieldLocator:
    selector: str
    kind: FieldKind = FieldKind.TEXT


FIELD_MAP = {
    "requestor_category": FieldLocator("#edit-requestor-category", FieldKind.SELECT),
    "delivery_method": FieldLocator("#edit-delivery-method", FieldKind.SELECT),
    "given_name": FieldLocator("#edit-given-name"),
    "family_name": FieldLocator("#edit-family-name"),
    "email": FieldLocator("#edit-your-e-mail-address"),
    "phone": FieldLocator("#edit-your-telephone-number"),
    "address": FieldLocator("#edit-address-fieldset-address"),
    "address_2": FieldLocator("#edit-address-fieldset-address-2"),
    "city": FieldLocator("#edit-address-fieldset-city"),
    "state_province": FieldLocator(
        "#edit-address-fieldset-state-province-select", FieldKind.SELECT
    ),
    "postal_code": FieldLocator("#edit-address-fieldset-postal-code"),
    "country": FieldLocator("#edit-address-fieldset-country", FieldKind.SELECT),
    "preferred_language": FieldLocator(
        "#edit-preferred-language-of-correspondence", FieldKind.SELECT
    ),
    "consent": FieldLocator("#edit-consent", FieldKind.SELECT),
    "additional_comments": FieldLocator("#edit-description"),
}
