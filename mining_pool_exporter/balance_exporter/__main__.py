from balance_exporter.cli import main

main()
