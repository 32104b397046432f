"""AI website builder — business profile in, editable multi-section website out."""
