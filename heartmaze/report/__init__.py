from .generator import render_image, render_text, save_snapshot

__all__ = ['render_image', 'render_text', 'save_snapshot']
