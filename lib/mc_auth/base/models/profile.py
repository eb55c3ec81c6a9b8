# mc_auth/base/models/profile.py
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


def parse_uuid(value: Union[str, uuid.UUID]) -> uuid.UUID:
    """Accept both the dashed form and the undashed hex the Mojang APIs return"""
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(hex=str(value))


@dataclass
class ProfileProperty:
    """
    Opaque signed key/value pair attached to a profile or account
    """
    name: str
    value: str
    signature: Optional[str] = None

    @property
    def is_signed(self) -> bool:
        return bool(self.signature)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'name': self.name,
            'value': self.value
        }
        if self.signature:
            result['signature'] = self.signature
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProfileProperty':
        return cls(
            name=data['name'],
            value=data.get('value', ''),
            signature=data.get('signature')
        )


@dataclass(eq=False)
class GameProfile:
    """
    A named, identified player entity bindable to a session.

    Two profiles are equal when their id and name match; properties are not compared.
    """
    id: uuid.UUID
    name: str
    properties: List[ProfileProperty] = field(default_factory=list)

    def __post_init__(self):
        self.id = parse_uuid(self.id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameProfile):
            return NotImplemented
        return self.id == other.id and self.name == other.name

    def __hash__(self) -> int:
        return hash((self.id, self.name))

    def get_property(self, name: str) -> Optional[ProfileProperty]:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize in the wire format (undashed hex id)"""
        result: Dict[str, Any] = {
            'id': self.id.hex,
            'name': self.name
        }
        if self.properties:
            result['properties'] = [prop.to_dict() for prop in self.properties]
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GameProfile':
        return cls(
            id=parse_uuid(data['id']),
            name=data.get('name', ''),
            properties=[ProfileProperty.from_dict(p) for p in data.get('properties') or []]
        )
