"""Toornament client - a Python client for the Toornament tournament web API.

The client authenticates with the OAuth2 client-credentials flow and keeps a
cached bearer token fresh across threads. Resources are reached either
through direct accessor methods or through a fluent navigator:

- ``Toornament``: the client facade
- ``ResourceNavigator``: lazy, reusable paths such as
  ``tournaments/1/matches/2/games``
- ``toornament_client.models``: typed models of the resources
- ``toornament_client.errors``: the exception taxonomy

Example:
    ```python
    from toornament_client import Toornament
    from toornament_client.models import Participant

    with Toornament.from_env() as toornament:
        tournaments = toornament.tournaments()

        games = (
            toornament.tournaments_nav()
            .identified_by("1")
            .into("matches")
            .identified_by("2")
            .into("games")
            .filtered_by(number=3)
            .collect()
        )

        toornament.create_tournament_participant("1", Participant(name="Evil Geniuses"))
    ```
"""

from toornament_client.client import Toornament
from toornament_client.errors.exceptions import APIError, ToornamentError
from toornament_client.navigator import ResourceNavigator

__version__ = "0.1.0"

__all__ = ["APIError", "ResourceNavigator", "Toornament", "ToornamentError", "__version__"]
