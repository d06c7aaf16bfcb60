from chronoprobe._cli import main

main()
