"""Cross-cutting helpers shared by all layers."""
