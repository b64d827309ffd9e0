"""Game rules and content: domain models, static tables and the character randomizer."""
