from create_react_vite_app.cli import main

main()
