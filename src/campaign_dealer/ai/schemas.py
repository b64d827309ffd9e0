"""JSON schemas sent to backends that support schema-constrained output.

Both are generated from the pydantic models with camelCase aliases, so the
schema a backend is given and the model that validates its answer cannot
drift apart.
"""

from campaign_dealer.game.models import CharacterIdentity, GameMasterScript

CHARACTER_IDENTITY_JSON_SCHEMA = CharacterIdentity.model_json_schema(by_alias=True)
GAME_MASTER_SCRIPT_JSON_SCHEMA = GameMasterScript.model_json_schema(by_alias=True)
