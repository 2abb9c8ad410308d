from scalargrad.main import main

main()
