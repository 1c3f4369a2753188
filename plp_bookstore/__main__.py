from .queries import main

main()
