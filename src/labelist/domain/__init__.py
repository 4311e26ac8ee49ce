"""Domain layer: entities, ports and the label-to-playlist pipeline."""
