from result_ingest.cli import main

main()
