from httpcheck.main import main

main()
