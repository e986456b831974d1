"""Review execution engine: inspectors, knowledge, cache, report, run."""
