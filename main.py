# ==============================================================================
# PALFORGE - MAIN ENTRY POINT
# ==============================================================================
# Launcher for the PalForge command-line interface.
#
# Usage:
#   python main.py --version        # Show version
#   python main.py --check          # Check dependencies
#   python main.py --paths          # Show data paths
#   python main.py <command> ...    # Run a CLI command (see --help)
# ==============================================================================

import sys
import traceback


# ==============================================================================
# BANNER
# ==============================================================================

def print_banner():
    """Print the application banner."""
    banner = """
    ╔═══════════════════════════════════════════════════════╗
    ║                                                       ║
    ║    PalForge                                           ║
    ║    Palette variation generator for Ragnarok Online    ║
    ║                                                       ║
    ╚═══════════════════════════════════════════════════════╝
    """
    print(banner)


# ==============================================================================
# DEPENDENCY CHECKS
# ==============================================================================

def check_dependencies():
    """
    Check if required dependencies are installed.

    Returns:
        Tuple of (all_ok, missing_packages)
    """
    missing = []

    for module, package in (('sqlalchemy', 'SQLAlchemy'), ('PIL', 'Pillow')):
        try:
            __import__(module)
        except ImportError:
            missing.append(package)

    return (len(missing) == 0, missing)


# ==============================================================================
# MAIN FUNCTION
# ==============================================================================

def main(argv=None):
    """
    Main entry point for PalForge.

    Handles the launcher-only flags and hands everything else to the CLI.
    """
    argv = list(sys.argv[1:] if argv is None else argv)

    if '--check' in argv:
        print("Checking dependencies...")
        print(f"  Python: {sys.version}")

        all_ok, missing = check_dependencies()
        if all_ok:
            print("[OK] All dependencies installed")
        else:
            print(f"[MISSING] {', '.join(missing)}")
        return 0 if all_ok else 1

    all_ok, missing = check_dependencies()
    if not all_ok:
        print(f"[ERROR] Missing required packages: {', '.join(missing)}")
        print(f"Install with: pip install {' '.join(missing)}")
        return 1

    if '--paths' in argv:
        argv = ['paths']

    if not argv:
        print_banner()

    try:
        from palforge.cli import main as cli_main
        return cli_main(argv)
    except Exception as e:
        print(f"\n[FATAL ERROR] {e}")
        traceback.print_exc()
        return 1


# ==============================================================================
# SCRIPT ENTRY POINT
# ==============================================================================
if __name__ == "__main__":
    sys.exit(main())
