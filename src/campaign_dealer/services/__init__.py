"""Application services that orchestrate the game and AI layers."""
