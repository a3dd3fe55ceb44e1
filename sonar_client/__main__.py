from sonar_client.cli import main

main()
