from packsync.cli import main_entry

main_entry()
