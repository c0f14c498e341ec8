from fleetcheck.cli.app import main

main()
