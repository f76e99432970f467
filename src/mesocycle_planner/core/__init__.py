"""Pure domain logic: models, templates, strategy resolution, editing and calendar."""
