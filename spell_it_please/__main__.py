"""Package entry point for ``python -m spell_it_please``.

WHY: Users start the app with ``python -m spell_it_please``. Python's
``-m`` flag looks for ``__main__.py`` inside the package and executes it.

HOW: Delegates to the GUI's main(). There is no command-line mode.
"""

if __name__ == "__main__":
    from spell_it_please.gui import main
    main()
