"""
gitx

Git helper CLI with gitmoji commit shortcuts and aliases.
"""

__version__ = "1.0.5"

# Shown under the top-level help text
DEVELOPER = {
    'name': 'Shahid Khan',
    'github': 'https://github.com/shahidkhan18',
    'email': 'shahidseran786@gmail.com',
    'note': 'For full project information and contributions, see the GitHub repository.',
}
