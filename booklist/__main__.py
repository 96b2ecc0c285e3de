from booklist.main import main

main()
