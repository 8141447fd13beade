from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from typing import Annotated, Dict, List, Literal, Optional, Union

from catalog_core import pagination

# Attribute values coming back from `distinct_on` selections are strings or numbers.
Scalar = Union[int, float, str]

# {"type": {"_in": ["Creature", "Spell"]}, "rarity": {"_in": ["Rare"]}}
FilterPredicate = Dict[str, Dict[str, List[Scalar]]]

SortDirection = Literal["asc", "desc"]


class FilterSelection(BaseModel):
    """One attribute/value pair the user ticked in a filter category."""
    model_config = ConfigDict(frozen=True)

    key: str
    value: Scalar
    label: Optional[str] = None

    @property
    def chip(self) -> str:
        return f"{self.label or self.key}: {self.value}"


class FilterType(BaseModel):
    """A filter category with its selectable values, as listed in the filter panel."""
    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    values: List[FilterSelection] = []


class SortOrder(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: Optional[str] = None
    direction: Optional[SortDirection] = None


class PageState(BaseModel):
    model_config = ConfigDict(frozen=True)

    current_page: int = Field(1, ge=1)
    page_size: int = Field(48, ge=1)
    total_count: int = Field(0, ge=0)

    @property
    def page_count(self) -> int:
        return pagination.page_count(self.total_count, self.page_size)

    @property
    def offset(self) -> int:
        return pagination.offset(self.current_page, self.page_size)


class QueryVariables(BaseModel):
    model_config = ConfigDict(frozen=True)

    name_like: str
    category: str
    predicate: FilterPredicate = {}
    sort_key: Optional[str] = None
    sort_direction: Optional[SortDirection] = None
    limit: int
    offset: int

    def where(self) -> dict:
        """Hasura `card_details_bool_exp` shared by the listing and the count query."""
        return {
            "name": {"_ilike": self.name_like},
            "tcg": {"_eq": self.category},
            # outer OR across filter keys, kept as the backend currently receives it
            "_or": {key: {op: list(values) for op, values in cond.items()}
                    for key, cond in self.predicate.items()},
        }

    def order_by(self) -> dict:
        if self.sort_direction is None:
            return {}
        return {self.sort_key or "set": self.sort_direction}

    def to_graphql(self) -> dict:
        return {
            "where": self.where(),
            "order_by": self.order_by(),
            "limit": self.limit,
            "offset": self.offset,
        }

    def count_variables(self) -> dict:
        return {"where": self.where()}


# --- Response shapes -------------------------------------------------------
# Field names follow the GraphQL selection; aliases cover names that would
# shadow builtins. Ids may come back as uuids or integer primary keys.

def _id_as_str(value):
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


CardId = Annotated[str, BeforeValidator(_id_as_str)]


class CardSummary(BaseModel):
    """One row of the catalog listing."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: CardId
    name: Optional[str] = None
    price: Optional[float] = None
    set_name: Optional[str] = Field(None, alias="set")
    image: Optional[str] = None


class CardDetail(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: CardId
    name: Optional[str] = None
    price: Optional[float] = None
    price_foil: Optional[float] = None
    price_other: Optional[float] = None
    card_img: Optional[str] = None
    card_type: Optional[str] = Field(None, alias="type")
    subtype: Optional[str] = None
    set_name: Optional[str] = Field(None, alias="set")
    rarity: Optional[str] = None
    card_id: Optional[Scalar] = None
    set_code: Optional[str] = None
    cost: Optional[Scalar] = None
    cost_text: Optional[str] = None
    attack: Optional[Scalar] = None
    defence: Optional[Scalar] = None
    flavor_text: Optional[str] = None
    kind: Optional[str] = None
    text: Optional[str] = None
    # not selected by CardById today; shown when a backend starts returning them
    signet: Optional[str] = None
    home: Optional[str] = None
    resistance: Optional[Scalar] = None
    site: Optional[Scalar] = None

    @property
    def title(self) -> str:
        number = f"{self.set_code or ''}{self.card_id or ''}"
        return f"{self.name or 'Unnamed card'} (#{number}) {self.set_name or ''}".rstrip()


class SimilarCard(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: CardId
    card_name: Optional[str] = None
    card_price: Optional[float] = None
    price_foil: Optional[float] = None
    price_tng: Optional[float] = None
    card_img: Optional[str] = None

