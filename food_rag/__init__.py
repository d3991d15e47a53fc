"""Retrieval augmented question answering over a small food dataset."""
