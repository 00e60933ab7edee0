from .ui_preview import main

main()
