from sdfterm.app import main

main()
