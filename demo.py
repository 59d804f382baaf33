"""Demo entry point for the Zombie Dice score keeper."""
from zombiedice.ui.screens.app import main

if __name__ == "__main__":
    main()
