from .creditgraph import main

main()
