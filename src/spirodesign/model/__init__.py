"""
The MODEL layer contains pure data structures and business logic.
It has NO knowledge of the GUI (Qt).
It deals with Gear Geometry, Kinematics, the recorded Locus and I/O.
"""
