"""Domain layer: email model and delivery exceptions."""
