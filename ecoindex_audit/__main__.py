from ecoindex_audit.cli import main

main()
