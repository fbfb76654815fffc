"""Tests for the fluent resource navigator."""

import dataclasses

import pytest

from toornament_client.errors.exceptions import InvalidNavigationError
from toornament_client.models import Game, Match, MatchResult, MatchResultSimple, MatchStatus, Opponent, Participant
from toornament_client.testing import request_json


@pytest.fixture
def matches(client):
    return client.tournaments_nav().identified_by("1").into("matches")


class TestBuilding:
    @pytest.mark.unit
    def test_builder_calls_send_nothing(self, client, fake):
        navigator = client.tournaments_nav().identified_by("1").into("matches").identified_by("2").into("games")

        assert str(navigator.path) == "/tournaments/1/matches/2/games"
        assert repr(navigator) == "ResourceNavigator(/tournaments/1/matches/2/games)"
        assert fake.requests == []

    @pytest.mark.unit
    def test_intermediate_navigators_are_reusable(self, matches, fake):
        fake.route("GET", "/v1/tournaments/1/matches/2", json={"id": "2"})
        fake.route("GET", "/v1/tournaments/1/matches/3", json={"id": "3"})

        second = matches.identified_by("2").fetch()
        third = matches.identified_by("3").fetch()

        assert (second.id, third.id) == ("2", "3")
        assert str(matches.path) == "/tournaments/1/matches"

    @pytest.mark.unit
    def test_illegal_builder_call(self, client):
        with pytest.raises(InvalidNavigationError):
            client.tournaments_nav().into("matches")


class TestReading:
    @pytest.mark.unit
    def test_collect_filtered_games(self, matches, fake):
        fake.route(
            "GET",
            "/v1/tournaments/1/matches/2/games",
            json=[{"number": 3, "status": "completed", "opponents": [{"number": 1, "result": 1}]}],
        )

        games = matches.identified_by("2").into("games").filtered_by({"number": 3}).collect()

        assert str(fake.resource_requests[0].url) == (
            "https://api.toornament.com/v1/tournaments/1/matches/2/games?number=3"
        )
        assert games == [
            Game(number=3, status=MatchStatus.COMPLETED, opponents=[Opponent(number=1, result=MatchResultSimple.WIN)])
        ]

    @pytest.mark.unit
    def test_fetch_singular_result(self, matches, fake):
        fake.route("GET", "/v1/tournaments/1/matches/2/result", json={"status": "running", "opponents": []})

        result = matches.identified_by("2").into("result").fetch()

        assert result == MatchResult(status=MatchStatus.RUNNING)

    @pytest.mark.unit
    def test_unknown_segments_decode_to_json(self, client, fake):
        fake.route("GET", "/v1/tournaments/1/prizes", json=[{"rank": 1}])

        assert client.tournaments_nav().identified_by("1").into("prizes").collect() == [{"rank": 1}]

    @pytest.mark.unit
    def test_collect_requires_collection(self, matches):
        with pytest.raises(InvalidNavigationError):
            matches.identified_by("2").collect()


class TestWriting:
    @pytest.mark.unit
    def test_create_posts_to_collection(self, client, fake):
        fake.route("POST", "/v1/tournaments/1/participants", json={"id": "42", "name": "Evil Geniuses"})

        participant = (
            client.tournaments_nav()
            .identified_by("1")
            .into("participants")
            .create(lambda: Participant(name="Evil Geniuses"))
        )

        request = fake.resource_requests[0]
        assert request.method == "POST"
        assert request_json(request) == {"name": "Evil Geniuses"}
        assert participant == Participant(id="42", name="Evil Geniuses")

    @pytest.mark.unit
    def test_create_with_identity_edits(self, client, fake):
        fake.route("PATCH", "/v1/tournaments/1/participants/42", json={"id": "42", "name": "Renamed"})

        client.tournaments_nav().identified_by("1").into("participants").create(
            lambda: Participant(id="42", name="Renamed")
        )

        assert fake.resource_requests[0].method == "PATCH"

    @pytest.mark.unit
    def test_create_requires_collection(self, matches):
        with pytest.raises(InvalidNavigationError):
            matches.identified_by("2").create(lambda: Match())

    @pytest.mark.unit
    def test_edit_with_mutator_fetches_first(self, matches, fake):
        fake.route("GET", "/v1/tournaments/1/matches/3", json={"id": "3", "number": 1, "status": "pending"})
        fake.route("PATCH", "/v1/tournaments/1/matches/3", json={"id": "3", "number": 3, "status": "pending"})

        match = matches.identified_by("3").edit(lambda m: dataclasses.replace(m, number=3))

        get, patch = fake.resource_requests
        assert get.method == "GET"
        assert patch.method == "PATCH"
        assert request_json(patch) == {"id": "3", "number": 3, "status": "pending", "opponents": []}
        assert match.number == 3

    @pytest.mark.unit
    def test_edit_with_in_place_mutator(self, matches, fake):
        fake.route("GET", "/v1/tournaments/1/matches/3", json={"id": "3", "number": 1})
        fake.route("PATCH", "/v1/tournaments/1/matches/3", json={"id": "3", "number": 7})

        def renumber(m):
            m.number = 7

        matches.identified_by("3").edit(renumber)

        assert request_json(fake.resource_requests[1])["number"] == 7

    @pytest.mark.unit
    def test_edit_unknown_resource_patches_in_place(self, client, fake):
        fake.route("GET", "/v1/tournaments/1/sponsors/5", json={"id": "5", "name": "old"})
        fake.route("PATCH", "/v1/tournaments/1/sponsors/5", json={"id": "5", "name": "new"})

        sponsor = (
            client.tournaments_nav()
            .identified_by("1")
            .into("sponsors")
            .identified_by("5")
            .edit(lambda current: {**current, "name": "new"})
        )

        get, patch = fake.resource_requests
        assert get.method == "GET"
        assert patch.method == "PATCH"
        assert str(patch.url) == "https://api.toornament.com/v1/tournaments/1/sponsors/5"
        assert request_json(patch) == {"id": "5", "name": "new"}
        assert sponsor == {"id": "5", "name": "new"}

    @pytest.mark.unit
    def test_edit_singular_result_puts(self, matches, fake):
        fake.route("PUT", "/v1/tournaments/1/matches/2/result", json={"status": "completed", "opponents": []})

        result = matches.identified_by("2").into("result").edit(MatchResult(status=MatchStatus.COMPLETED))

        assert fake.resource_requests[0].method == "PUT"
        assert result.status is MatchStatus.COMPLETED

    @pytest.mark.unit
    def test_edit_requires_entity(self, matches):
        with pytest.raises(InvalidNavigationError):
            matches.edit(Match(id="2"))

    @pytest.mark.unit
    def test_delete(self, matches, fake):
        fake.route("DELETE", "/v1/tournaments/1/matches/2", status_code=204)

        assert matches.identified_by("2").delete() is None
        assert fake.resource_requests[0].method == "DELETE"

    @pytest.mark.unit
    def test_replace_all(self, client, fake):
        fake.route("PUT", "/v1/tournaments/1/participants", json=[{"id": "1", "name": "A"}, {"id": "2", "name": "B"}])

        participants = (
            client.tournaments_nav()
            .identified_by("1")
            .into("participants")
            .replace_all([Participant(name="A"), Participant(name="B")])
        )

        assert request_json(fake.resource_requests[0]) == [{"name": "A"}, {"name": "B"}]
        assert [p.id for p in participants] == ["1", "2"]
