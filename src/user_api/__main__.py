from user_api.main import main

main()
