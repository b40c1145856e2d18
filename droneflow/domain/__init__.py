"""Domain layer: lifecycles, side effects, folder layout."""
