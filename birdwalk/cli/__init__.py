"""birdwalk command-line tools.

    python -m birdwalk.cli image "Common Raven" --scientific "Corvus corax"
    python -m birdwalk.cli search rav
"""
