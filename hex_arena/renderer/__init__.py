"""Rendering subpackage.

The engine itself stops at abstract mesh templates and instance buffers. This
package holds a lightweight consumer of that contract: a top-down Pillow +
NumPy rasterizer used by the control panel and by tests to eyeball a
generated grid. See :mod:`hex_arena.renderer.preview`.
"""
