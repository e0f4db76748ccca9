"""Key management tools for the sigillum plugin registry."""
