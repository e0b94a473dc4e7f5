"""Domain layer - business models and view models shared by all layers."""
