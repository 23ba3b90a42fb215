"""Core resolution pipeline: URL builder, probe, scanner, pool, aggregator."""
