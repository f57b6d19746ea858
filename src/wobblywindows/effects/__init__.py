"""Per-gesture deformation effects driven by the host's frame clock."""
