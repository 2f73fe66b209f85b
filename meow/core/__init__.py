"""Retrieval pipeline: representation, embedding, ranking, disambiguation, search."""
