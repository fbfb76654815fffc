"""Typed query filters for collection endpoints.

A filter is anything with a ``to_params()`` method returning raw values;
``ResourcePath.filtered_by`` renders them for the wire. Plain mappings are
accepted as well.
"""

import enum
from dataclasses import dataclass

from toornament_client.models.videos import VideoCategory


class DateSort(str, enum.Enum):
    ASCENDING = "date_asc"
    DESCENDING = "date_desc"


class ParticipantSort(str, enum.Enum):
    CREATED_ASCENDING = "created_asc"
    CREATED_DESCENDING = "created_desc"
    ALPHABETIC = "alphabetic"


@dataclass(frozen=True)
class MatchFilter:
    """Filter for discipline match listings.

    Attributes:
        featured: Only matches of featured (``True``) or non-featured
            (``False``) tournaments.
        has_result: Only matches with (``True``) or without (``False``) a result.
        sort: Chronological order of the collection.
        participant_id: Only matches involving this participant.
        tournament_ids: Only matches of these tournaments.
        with_games: Include a summary of each game.
        before_date: Matches scheduled before this ISO date.
        after_date: Matches scheduled after this ISO date.
        page: Page of the collection.
    """

    featured: bool | None = None
    has_result: bool | None = None
    sort: DateSort | None = DateSort.ASCENDING
    participant_id: str | None = None
    tournament_ids: tuple[str, ...] | None = None
    with_games: bool = False
    before_date: str | None = None
    after_date: str | None = None
    page: int | None = 1

    def to_params(self) -> dict:
        return {
            "featured": self.featured,
            "has_result": self.has_result,
            "sort": self.sort,
            "participant_id": self.participant_id,
            "tournament_ids": self.tournament_ids,
            "with_games": self.with_games,
            "before_date": self.before_date,
            "after_date": self.after_date,
            "page": self.page,
        }


@dataclass(frozen=True)
class ParticipantsFilter:
    with_lineup: bool = False
    with_custom_fields: bool = False
    sort: ParticipantSort = ParticipantSort.CREATED_ASCENDING
    page: int = 1

    def to_params(self) -> dict:
        return {
            "with_lineup": self.with_lineup,
            "with_custom_fields": self.with_custom_fields,
            "sort": self.sort,
            "page": self.page,
        }


@dataclass(frozen=True)
class VideosFilter:
    category: VideoCategory | None = None
    sort: DateSort = DateSort.ASCENDING
    page: int | None = None

    def to_params(self) -> dict:
        return {"category": self.category, "sort": self.sort, "page": self.page}
