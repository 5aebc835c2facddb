"""Host adapters and offline replay helpers."""
