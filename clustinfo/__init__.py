"""Extend annotation tables to include every member of the clusters they reference."""
