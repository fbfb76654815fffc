"""The Toornament client facade.

``Toornament`` wires credentials, token manager, transport and dispatcher
together. It offers two equivalent ways to reach the resources, both ending
in the same ``Dispatcher``:

- the fluent navigator (``navigate``, ``tournaments_nav``, ``disciplines_nav``)
- direct accessor methods mirroring the service endpoints

The object is safe to share between threads; the bearer token is refreshed
automatically before it expires.
"""

import dataclasses
from collections.abc import Callable, Iterable
from typing import Any

import httpx

from toornament_client.auth.credentials import CredentialResolver, Credentials, resolve_timeout
from toornament_client.auth.token import AccessToken, TokenManager
from toornament_client.codec import EntityCodec
from toornament_client.dispatch.dispatcher import Dispatcher
from toornament_client.filters import MatchFilter, ParticipantsFilter, VideosFilter
from toornament_client.models import (
    Discipline,
    Game,
    Match,
    MatchResult,
    Participant,
    Permission,
    PermissionAttribute,
    Stage,
    Tournament,
    Video,
)
from toornament_client.navigator import ResourceNavigator
from toornament_client.transport.http import API_BASE_URL, DEFAULT_TIMEOUT, TOKEN_URL, HTTPTransport


class Toornament:
    """Client for the Toornament web API.

    Args:
        api_key: Application API key.
        client_id: OAuth2 client id of the application.
        client_secret: OAuth2 client secret of the application.
        timeout: Seconds before a request is abandoned; None disables it.
        base_url: Root of the resource endpoints.
        token_url: OAuth2 token endpoint.
        transport: Optional ``httpx`` transport (a mock in tests, or one of
            the retry transports).
        codec: Entity codec; the default handles every bundled model.
        clock: Monotonic clock used for token expiry.

    Example:
        ```python
        with Toornament("API_KEY", "CLIENT_ID", "CLIENT_SECRET") as toornament:
            disciplines = toornament.disciplines()
            tournament = toornament.tournaments("1")
        ```
    """

    def __init__(
        self,
        api_key: str,
        client_id: str,
        client_secret: str,
        *,
        timeout: float | None = DEFAULT_TIMEOUT,
        base_url: str = API_BASE_URL,
        token_url: str = TOKEN_URL,
        transport: httpx.BaseTransport | None = None,
        codec: EntityCodec | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.credentials = Credentials(api_key=api_key, client_id=client_id, client_secret=client_secret)
        self._transport = HTTPTransport(base_url=base_url, timeout=timeout, transport=transport)
        token_kwargs = {"clock": clock} if clock is not None else {}
        self.token_manager = TokenManager(self.credentials, self._transport, token_url=token_url, **token_kwargs)
        self.dispatcher = Dispatcher(
            self._transport, self.token_manager, api_key=self.credentials.api_key, codec=codec
        )

    @classmethod
    def from_env(
        cls,
        resolver: CredentialResolver | None = None,
        *,
        timeout: float | None = None,
        **kwargs: Any,
    ) -> "Toornament":
        """Build a client from ``TOORNAMENT_*`` environment variables or a .env file.

        Raises:
            CredentialNotFoundError: If a credential is missing.
        """
        resolver = resolver or CredentialResolver()
        credentials = Credentials.from_env(resolver)
        return cls(
            credentials.api_key,
            credentials.client_id,
            credentials.client_secret,
            timeout=resolve_timeout(resolver, timeout, DEFAULT_TIMEOUT),
            **kwargs,
        )

    def __repr__(self) -> str:
        return f"Toornament(base_url={self._transport.base_url!r})"

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self._transport.close()

    def refresh(self) -> AccessToken:
        """Force a new access token; normally done automatically."""
        return self.token_manager.refresh()

    # Navigator roots

    def navigate(self, *collections: str) -> ResourceNavigator:
        """Return a navigator at the root, or into the given segments."""
        navigator = ResourceNavigator(self.dispatcher)
        for name in collections:
            navigator = navigator.into(name)
        return navigator

    def tournaments_nav(self) -> ResourceNavigator:
        return self.navigate("tournaments")

    def disciplines_nav(self) -> ResourceNavigator:
        return self.navigate("disciplines")

    def _tournament(self, tournament_id: str) -> ResourceNavigator:
        return self.tournaments_nav().identified_by(tournament_id)

    def _match(self, tournament_id: str, match_id: str) -> ResourceNavigator:
        return self._tournament(tournament_id).into("matches").identified_by(match_id)

    # Disciplines

    def disciplines(self, discipline_id: str | None = None) -> list[Discipline]:
        """All disciplines, or a one-element list with the given one."""
        if discipline_id is None:
            return self.disciplines_nav().collect()
        return [self.disciplines_nav().identified_by(discipline_id).fetch()]

    def matches_by_discipline(self, discipline_id: str, match_filter: MatchFilter | None = None) -> list[Match]:
        return (
            self.disciplines_nav()
            .identified_by(discipline_id)
            .into("matches")
            .filtered_by(match_filter or MatchFilter())
            .collect()
        )

    # Tournaments

    def tournaments(self, tournament_id: str | None = None, with_streams: bool = False) -> list[Tournament]:
        """Public tournaments, or a one-element list with the given one.

        ``with_streams`` includes the tournaments' streams.
        """
        if tournament_id is None:
            return self.tournaments_nav().filtered_by(with_streams=with_streams).collect()
        return [self._tournament(tournament_id).fetch(query={"with_streams": with_streams})]

    def my_tournaments(self) -> list[Tournament]:
        """Tournaments owned by the authenticated application's user."""
        return self.navigate("me", "tournaments").collect()

    def edit_tournament(self, tournament: Tournament) -> Tournament:
        """Update ``tournament`` if it has an id, otherwise create it."""
        return self.tournaments_nav().create(lambda: tournament)

    def delete_tournament(self, tournament_id: str) -> None:
        """Delete a tournament, its participants and all its matches."""
        self._tournament(tournament_id).delete()

    def tournament_stages(self, tournament_id: str) -> list[Stage]:
        return self._tournament(tournament_id).into("stages").collect()

    def tournament_videos(self, tournament_id: str, videos_filter: VideosFilter | None = None) -> list[Video]:
        return self._tournament(tournament_id).into("videos").filtered_by(videos_filter or VideosFilter()).collect()

    # Matches

    def matches(self, tournament_id: str, match_id: str | None = None, with_games: bool = False) -> list[Match]:
        if match_id is None:
            return self._tournament(tournament_id).into("matches").filtered_by(with_games=with_games).collect()
        return [self._match(tournament_id, match_id).fetch(query={"with_games": with_games})]

    def update_match(self, tournament_id: str, match_id: str, match: Match) -> Match:
        return self._match(tournament_id, match_id).edit(dataclasses.replace(match, id=match_id))

    def match_result(self, tournament_id: str, match_id: str) -> MatchResult:
        return self._match(tournament_id, match_id).into("result").fetch()

    def set_match_result(self, tournament_id: str, match_id: str, result: MatchResult) -> MatchResult:
        return self._match(tournament_id, match_id).into("result").edit(result)

    # Games

    def match_games(self, tournament_id: str, match_id: str, with_stats: bool = False) -> list[Game]:
        return self._match(tournament_id, match_id).into("games").filtered_by(with_stats=with_stats).collect()

    def match_game(self, tournament_id: str, match_id: str, game_number: int, with_stats: bool = False) -> Game:
        return (
            self._match(tournament_id, match_id)
            .into("games")
            .identified_by(game_number)
            .fetch(query={"with_stats": with_stats})
        )

    def update_match_game(self, tournament_id: str, match_id: str, game_number: int, game: Game) -> Game:
        return (
            self._match(tournament_id, match_id)
            .into("games")
            .identified_by(game_number)
            .edit(dataclasses.replace(game, number=game_number))
        )

    def match_game_result(self, tournament_id: str, match_id: str, game_number: int) -> MatchResult:
        return self._match(tournament_id, match_id).into("games").identified_by(game_number).into("result").fetch()

    def update_match_game_result(
        self,
        tournament_id: str,
        match_id: str,
        game_number: int,
        result: MatchResult,
        update_match: bool = False,
    ) -> MatchResult:
        """Replace the result of a game; ``update_match`` also recomputes the match result."""
        return (
            self._match(tournament_id, match_id)
            .into("games")
            .identified_by(game_number)
            .into("result")
            .edit(result, query={"update_match": update_match})
        )

    # Participants

    def tournament_participants(
        self, tournament_id: str, participants_filter: ParticipantsFilter | None = None
    ) -> list[Participant]:
        return (
            self._tournament(tournament_id)
            .into("participants")
            .filtered_by(participants_filter or ParticipantsFilter())
            .collect()
        )

    def tournament_participant(self, tournament_id: str, participant_id: str) -> Participant:
        return self._tournament(tournament_id).into("participants").identified_by(participant_id).fetch()

    def create_tournament_participant(self, tournament_id: str, participant: Participant) -> Participant:
        return self._tournament(tournament_id).into("participants").create(lambda: participant)

    def update_tournament_participant(self, tournament_id: str, participant: Participant) -> Participant:
        """Update ``participant`` if it has an id, otherwise create it."""
        return self._tournament(tournament_id).into("participants").create(lambda: participant)

    def update_tournament_participants(
        self, tournament_id: str, participants: Iterable[Participant]
    ) -> list[Participant]:
        """Replace every participant of the tournament."""
        return self._tournament(tournament_id).into("participants").replace_all(participants)

    def delete_tournament_participant(self, tournament_id: str, participant_id: str) -> None:
        self._tournament(tournament_id).into("participants").identified_by(participant_id).delete()

    # Permissions

    def tournament_permissions(self, tournament_id: str) -> list[Permission]:
        return self._tournament(tournament_id).into("permissions").collect()

    def tournament_permission(self, tournament_id: str, permission_id: str) -> Permission:
        return self._tournament(tournament_id).into("permissions").identified_by(permission_id).fetch()

    def create_tournament_permission(self, tournament_id: str, permission: Permission) -> Permission:
        return self._tournament(tournament_id).into("permissions").create(lambda: permission)

    def update_tournament_permission_attributes(
        self, tournament_id: str, permission_id: str, attributes: Iterable[PermissionAttribute]
    ) -> Permission:
        """Replace the attributes of an existing permission."""
        permission = Permission(id=permission_id, attributes=list(attributes))
        return self._tournament(tournament_id).into("permissions").identified_by(permission_id).edit(permission)

    def delete_tournament_permission(self, tournament_id: str, permission_id: str) -> None:
        self._tournament(tournament_id).into("permissions").identified_by(permission_id).delete()
