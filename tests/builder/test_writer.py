from blazesql import SQLWriter


def test_writer_collects_text_and_args():
    writer = SQLWriter()
    writer.write("a=?")
    writer.append(1)
    writer.write(" AND b IN (?,?)")
    writer.extend([2, 3])
    assert writer.text == "a=? AND b IN (?,?)"
    assert writer.args == [1, 2, 3]


def test_writer_reset():
    writer = SQLWriter()
    writer.write("SELECT id FROM t WHERE x=?")
    writer.append("x")
    writer.reset()
    assert writer.text == ""
    assert writer.args == []


def test_writer_args_are_a_copy():
    writer = SQLWriter()
    writer.append(1)
    writer.args.append(2)
    assert writer.args == [1]
