"""Infrastructure layer: graph store access, graph projections, design loading."""
