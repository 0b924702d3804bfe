"""Result objects and decision support."""
