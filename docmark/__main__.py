from docmark.main import main

main()
