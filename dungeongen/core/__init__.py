"""Generation core: random source, noise engine, errors and the level pipeline."""
