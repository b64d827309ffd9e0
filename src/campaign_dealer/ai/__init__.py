"""AI generation layer.

Architecture
------------
``prompts``   builds provider-agnostic ``AIPrompt`` values from domain input.
``registry``  validates AI settings and resolves the configured provider.
``providers`` holds one ``AIProvider`` implementation per backend.
``parsing``   turns raw model text into validated pydantic models.

Import the submodules directly; this package keeps no import-time state.
"""
