from tapedeck.adapters.textual.app import main

main()
