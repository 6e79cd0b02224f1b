from pyimports.cli import main

main()
