"""
Record models for the characters, age ranges and merged records tables.

Table attributes use camelCase; the dataclasses use snake_case and
convert on the way in and out.
"""

from dataclasses import dataclass
from typing import Any, Dict

from merge_api.utils.decimal_utils import replace_decimals, replace_floats


@dataclass
class Character:
    """
    Stored character.

    Attributes:
        id: UUID of the record
        name: Character name (primary key of the characters table)
        age: Age in years
        attribute: Free-form attribute
        created_at: ISO-8601 creation timestamp
        updated_at: ISO-8601 last update timestamp
    """

    id: str
    name: str
    age: int
    attribute: str
    created_at: str
    updated_at: str

    def to_dict(self) -> Dict[str, Any]:
        """Render the record with API field names."""
        return {
            'id': self.id,
            'name': self.name,
            'age': self.age,
            'attribute': self.attribute,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        }

    def to_item(self) -> Dict[str, Any]:
        return replace_floats(self.to_dict())

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> 'Character':
        item = replace_decimals(item)
        return cls(
            id=item['id'],
            name=item['name'],
            age=item['age'],
            attribute=item['attribute'],
            created_at=item.get('createdAt', ''),
            updated_at=item.get('updatedAt', ''),
        )


@dataclass
class AgeRange:
    """
    Entry of the age range lookup table.

    Attributes:
        id: Identifier of the range
        range_name: Label assigned to merged records (e.g. 'Adulto')
        min_age: Inclusive lower bound
        max_age: Inclusive upper bound
    """

    id: str
    range_name: str
    min_age: int
    max_age: int

    def contains(self, age: float) -> bool:
        """Check whether age falls inside the inclusive range."""
        return self.min_age <= age <= self.max_age

    def to_item(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'rangeName': self.range_name,
            'minAge': self.min_age,
            'maxAge': self.max_age,
        }

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> 'AgeRange':
        item = replace_decimals(item)
        return cls(
            id=item['id'],
            range_name=item['rangeName'],
            min_age=item['minAge'],
            max_age=item['maxAge'],
        )


@dataclass
class MergedRecord:
    """
    Character combined with its age range classification.

    Attributes:
        id: UUID of the merged record (primary key)
        name: Character name (NameIndex GSI)
        age: Age copied from the character
        attribute: Attribute copied from the character
        range_name: Matching age range label
        merged_at: ISO-8601 timestamp of the merge
    """

    id: str
    name: str
    age: int
    attribute: str
    range_name: str
    merged_at: str

    def to_dict(self) -> Dict[str, Any]:
        """Render the record with API field names."""
        return {
            'id': self.id,
            'name': self.name,
            'age': self.age,
            'attribute': self.attribute,
            'rangeName': self.range_name,
            'mergedAt': self.merged_at,
        }

    def to_item(self) -> Dict[str, Any]:
        return replace_floats(self.to_dict())

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> 'MergedRecord':
        item = replace_decimals(item)
        return cls(
            id=item['id'],
            name=item['name'],
            age=item['age'],
            attribute=item['attribute'],
            range_name=item['rangeName'],
            merged_at=item['mergedAt'],
        )
