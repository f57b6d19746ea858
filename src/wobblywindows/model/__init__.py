"""
The MODEL layer contains pure data structures.
It has NO knowledge of the compositor or the renderer.
It deals with the spring grid topology, surface rectangles and gesture tags.
"""
