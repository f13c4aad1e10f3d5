from taskdeck.app import main

main()
