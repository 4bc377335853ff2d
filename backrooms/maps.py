"""
Built-in ASCII maps.

'#' is a wall, '.' is empty. The first line is row y=0 (south edge).
"""

# Reference fixture: 9x6 room, solid border, empty inside
BORDERED_ROOM = """
#########
#.......#
#.......#
#.......#
#.......#
#########
"""

DEMO_MAP = """
########################
#......#...............#
#......#...............#
#..##..#....#####......#
#..##..........#.......#
#..............#.......#
#####...####...#...##..#
#.......#..#...........#
#.......#..#...........#
#...#...####.....#######
#...#..................#
#...#.......##.........#
#...######..##....#....#
#.................#....#
#.................#....#
########################
"""
